"""
Evolver Configuration Module.

This module defines configuration classes for the expression genetic
algorithm: the run parameters supplied by the caller, logging settings and
fitness-evaluation options.
"""

from typing import Optional, Dict, Any, Literal, Mapping, Union
from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator
import math
import os


class ConfigurationError(ValueError):
    """Raised when a run configuration is malformed."""


class EvolutionParameters(BaseModel):
    """Parameters controlling the genetic algorithm run. All are required."""

    model_config = ConfigDict(validate_assignment=True)

    population_size: int = Field(
        gt=0,
        description="Number of organisms per generation (even)"
    )
    crossover_rate: float = Field(
        ge=0.0,
        le=1.0,
        description="Probability of crossover per reproduction"
    )
    mutation_rate: float = Field(
        ge=0.0,
        le=1.0,
        description="Probability of flipping each bit"
    )
    generation_limit: int = Field(
        ge=0,
        description="Number of generations to run"
    )
    chromosome_length: int = Field(
        ge=2,
        description="Genes per chromosome (even, at least one digit gene)"
    )
    target: float = Field(
        description="Value the expression should approach"
    )

    @field_validator('population_size')
    def validate_population_size(cls, v):
        """Parents are drawn in pairs, so the population must be even."""
        if v % 2 != 0:
            raise ValueError('Population size must be even')
        return v

    @field_validator('chromosome_length')
    def validate_chromosome_length(cls, v):
        """Ensure digit and operator genes can interleave."""
        if v % 2 != 0:
            raise ValueError('Chromosome length must be even')
        return v

    @field_validator('target')
    def validate_target(cls, v):
        """Ensure the target is a finite number."""
        if not math.isfinite(v):
            raise ValueError('Target must be a finite number')
        return v

    @property
    def genes_per_chromosome(self) -> int:
        """Number of genes in a freshly created chromosome."""
        return 2 * (self.chromosome_length // 2) - 1


class FitnessConfig(BaseModel):
    """Configuration for fitness evaluation."""

    cache_size: int = Field(
        default=0,
        ge=0,
        description="Number of fitness evaluations to memoize (0 disables)"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging and monitoring."""

    enable_logging: bool = Field(
        default=True,
        description="Enable evolution logging"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_interval: int = Field(
        default=1,
        ge=1,
        description="Generations between progress logs"
    )
    metrics_export: bool = Field(
        default=True,
        description="Emit per-generation statistics to logfire"
    )


class EvolverConfig(BaseModel):
    """Main configuration class for an evolution run."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid'
    )

    evolution: EvolutionParameters = Field(
        description="Run parameters"
    )
    fitness: FitnessConfig = Field(
        default_factory=FitnessConfig,
        description="Fitness evaluation configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging and monitoring configuration"
    )

    random_seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )

    @classmethod
    def from_env(cls, base: Optional["EvolverConfig"] = None) -> "EvolverConfig":
        """
        Create configuration from environment variables.

        Values found in the environment override those of ``base``; without
        a base every evolution parameter must be present in the environment.
        """
        config_dict = base.to_dict() if base is not None else {}

        env_fields = {
            "EVOLVER_POPULATION_SIZE": ("evolution", "population_size", int),
            "EVOLVER_CROSSOVER_RATE": ("evolution", "crossover_rate", float),
            "EVOLVER_MUTATION_RATE": ("evolution", "mutation_rate", float),
            "EVOLVER_GENERATION_LIMIT": ("evolution", "generation_limit", int),
            "EVOLVER_CHROMOSOME_LENGTH": ("evolution", "chromosome_length", int),
            "EVOLVER_TARGET": ("evolution", "target", float),
            "EVOLVER_FITNESS_CACHE_SIZE": ("fitness", "cache_size", int),
            "EVOLVER_LOG_LEVEL": ("logging", "log_level", str),
            "EVOLVER_LOG_INTERVAL": ("logging", "log_interval", int),
            "EVOLVER_RANDOM_SEED": (None, "random_seed", int),
        }

        for env_name, (section, key, cast) in env_fields.items():
            if value := os.getenv(env_name):
                try:
                    parsed = cast(value)
                except ValueError as e:
                    raise ConfigurationError(f"Invalid value for {env_name}: {value!r}") from e
                if section is None:
                    config_dict[key] = parsed
                else:
                    config_dict.setdefault(section, {})[key] = parsed

        return cls.from_mapping(config_dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EvolverConfig":
        """
        Build a configuration from plain data.

        Raises:
            ConfigurationError: If the data does not describe a valid run
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        import json
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    @classmethod
    def load(cls, filepath: str) -> "EvolverConfig":
        """Load configuration from JSON file."""
        import json
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_mapping(data)

    def validate_consistency(self) -> None:
        """Validate configuration consistency across components."""
        evolution = self.evolution

        if evolution.population_size % 2 != 0:
            raise ConfigurationError(
                f"Population size ({evolution.population_size}) must be even"
            )

        if evolution.chromosome_length < 2 or evolution.chromosome_length % 2 != 0:
            raise ConfigurationError(
                f"Chromosome length ({evolution.chromosome_length}) must be even "
                f"and hold at least one digit gene"
            )


def coerce_config(
    config: Union[EvolverConfig, EvolutionParameters, Mapping[str, Any]]
) -> EvolverConfig:
    """
    Normalize the accepted configuration forms to an ``EvolverConfig``.

    A mapping may either be a full configuration (with an ``evolution`` key)
    or the bare run parameters.
    """
    if isinstance(config, EvolverConfig):
        config.validate_consistency()
        return config
    if isinstance(config, EvolutionParameters):
        return EvolverConfig(evolution=config)
    if isinstance(config, Mapping):
        if "evolution" in config:
            return EvolverConfig.from_mapping(config)
        return EvolverConfig.from_mapping({"evolution": dict(config)})
    raise ConfigurationError(f"Unsupported configuration type: {type(config).__name__}")


# Convenience functions
def create_default_config() -> EvolverConfig:
    """Create the demonstration configuration: evolve an expression for 42."""
    return EvolverConfig(
        evolution=EvolutionParameters(
            population_size=200,
            crossover_rate=0.6,
            mutation_rate=0.05,
            generation_limit=20,
            chromosome_length=20,
            target=42
        )
    )


def create_test_config() -> EvolverConfig:
    """Create a configuration suitable for testing (smaller, faster, seeded)."""
    return EvolverConfig(
        evolution=EvolutionParameters(
            population_size=20,
            crossover_rate=0.7,
            mutation_rate=0.05,
            generation_limit=5,
            chromosome_length=10,
            target=42
        ),
        logging=LoggingConfig(
            log_level="WARNING",
            metrics_export=False
        ),
        random_seed=1234
    )
