"""
Evolver Core Module - Genetic Algorithm Components.

This module contains the core components of the expression genetic algorithm:
allele tables, chromosome representation, configuration, population
management and the evolution engine.
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

from src.evolver.core.chromosome import (
    Chromosome,
    Gene,
    GeneType,
    classify,
    decode
)

from src.evolver.core.population import (
    Population,
    Organism
)

from src.evolver.core.engine import (
    GeneticAlgorithmEngine,
    WinnerReport,
    run
)

__all__ = [
    # Configuration
    "EvolverConfig",
    "EvolutionParameters",
    "FitnessConfig",
    "LoggingConfig",
    "ConfigurationError",
    "create_default_config",
    "create_test_config",

    # Chromosome representation
    "Chromosome",
    "Gene",
    "GeneType",
    "classify",
    "decode",

    # Population management
    "Population",
    "Organism",

    # Engine
    "GeneticAlgorithmEngine",
    "WinnerReport",
    "run"
]
