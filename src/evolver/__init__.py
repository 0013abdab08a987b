"""
Expression Evolver Genetic Algorithm.

This module implements a binary-encoded genetic algorithm that evolves
arithmetic expressions over the digits 0-9 and the operators + - * / towards
a target number.
"""

from src.evolver.core.config import (
    EvolverConfig,
    EvolutionParameters,
    FitnessConfig,
    LoggingConfig,
    ConfigurationError,
    create_default_config,
    create_test_config
)
from src.evolver.core.chromosome import Chromosome, Gene, GeneType, classify, decode
from src.evolver.core.population import Population, Organism
from src.evolver.core.engine import GeneticAlgorithmEngine, WinnerReport, run
from src.evolver.fitness import (
    FitnessFunction,
    TargetFitness,
    ExpressionEvaluator,
    fitness
)

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "EvolverConfig",
    "EvolutionParameters",
    "FitnessConfig",
    "LoggingConfig",
    "ConfigurationError",
    "create_default_config",
    "create_test_config",
    # Chromosome
    "Chromosome",
    "Gene",
    "GeneType",
    "classify",
    "decode",
    # Population
    "Population",
    "Organism",
    # Engine
    "GeneticAlgorithmEngine",
    "WinnerReport",
    "run",
    # Fitness
    "FitnessFunction",
    "TargetFitness",
    "ExpressionEvaluator",
    "fitness",
]
