"""
Fitness metrics module for the expression genetic algorithm.

This module provides metric classes used by the fitness functions.
"""

from dataclasses import dataclass
from typing import Optional

from src.evolver.fitness.base import FitnessMetrics


@dataclass
class TargetMetrics(FitnessMetrics):
    """Closeness of an expression chromosome to the target number."""
    expression: str  # Clean phenotype that was evaluated
    result: Optional[float]  # None when the expression has no value
    target: float
    absolute_error: Optional[float]

    @property
    def evaluable(self) -> bool:
        return self.result is not None

    @property
    def exact(self) -> bool:
        return self.result is not None and self.result == self.target
