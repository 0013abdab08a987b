"""
PyTest configuration and fixtures for the Expression Evolver.

This module provides shared test fixtures: seeded and scripted randomness
sources, sample chromosomes and small run configurations.
"""

import os
import sys
import random
from typing import Iterable, List

import pytest
import logfire

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.evolver.core.chromosome import Chromosome
from src.evolver.core.config import create_test_config


# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


class ScriptedRandom:
    """Randomness source that replays a fixed list of draws."""

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            raise AssertionError(f"ScriptedRandom exhausted after {self.calls} draws")
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def rng():
    """Seeded randomness source."""
    return random.Random(42)


@pytest.fixture
def scripted_random():
    """Factory for randomness sources that replay given draws."""
    return ScriptedRandom


# Chromosome fixtures
@pytest.fixture
def example_chromosome():
    """Decodes to ``6 + 5 * 4 / 2 - (junk) + 1``."""
    return Chromosome.from_string("0110 00 0101 10 0100 11 0010 01 1111 00 0001")


@pytest.fixture
def forty_two_chromosome():
    """Decodes to ``6 * 7``."""
    return Chromosome.from_string("0110 10 0111")


@pytest.fixture
def random_chromosomes(rng):
    """Random chromosomes with plenty of junk genes."""
    return [
        Chromosome.random(12, rng).mutate(0.3, rng)
        for _ in range(100)
    ]


# Configuration fixtures
@pytest.fixture
def test_config():
    """Small seeded configuration."""
    return create_test_config()


@pytest.fixture
def run_parameters():
    """Bare run parameters as a caller would pass them."""
    return {
        "population_size": 10,
        "crossover_rate": 0.6,
        "mutation_rate": 0.05,
        "generation_limit": 3,
        "chromosome_length": 8,
        "target": 42
    }


@pytest.fixture(autouse=True)
def clean_evolver_env(monkeypatch):
    """Remove EVOLVER_* variables so tests see a known environment."""
    for name in list(os.environ):
        if name.startswith("EVOLVER_"):
            monkeypatch.delenv(name, raising=False)
