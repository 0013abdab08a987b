"""
Genetic Algorithm Engine for the Expression Evolver.

This module implements the generational loop: random initialization,
fitness evaluation, roulette-wheel selection, single-point crossover,
per-bit mutation and full generational replacement, followed by the
selection of a winning organism once the generation budget is spent.
"""

import random
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Dict, Any, Callable, Tuple, Union, Mapping

import logfire

from src.evolver.core.config import EvolverConfig, EvolutionParameters, coerce_config
from src.evolver.core.population import Population, Organism
from src.evolver.core.chromosome import Chromosome
from src.evolver.fitness.base import FitnessFunction, CachedFitnessFunction
from src.evolver.fitness.expression import evaluate_expression
from src.evolver.fitness.target import TargetFitness

ConfigLike = Union[EvolverConfig, EvolutionParameters, Mapping[str, Any]]


@dataclass
class WinnerReport:
    """Best organism of the final generation, as handed to the caller."""

    phenotype: str
    clean_phenotype: str
    result: Optional[float]
    fitness: float
    generation: int
    chromosome: Chromosome

    @classmethod
    def from_organism(cls, organism: Organism, generation: int) -> "WinnerReport":
        clean_phenotype = organism.clean_phenotype()
        return cls(
            phenotype=organism.phenotype(),
            clean_phenotype=clean_phenotype,
            result=evaluate_expression(clean_phenotype),
            fitness=organism.fitness,
            generation=generation,
            chromosome=organism.chromosome
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phenotype": self.phenotype,
            "clean_phenotype": self.clean_phenotype,
            "result": self.result,
            "fitness": self.fitness,
            "generation": self.generation,
            "chromosome": self.chromosome.to_dict()
        }


class GeneticAlgorithmEngine:
    """
    Main engine for evolving an arithmetic expression towards a target.

    Only raw chromosomes are carried from one generation to the next. Each
    generation is scored once into a :class:`Population`, parents are drawn
    from that snapshot, and the children form the next generation.
    """

    def __init__(
        self,
        config: ConfigLike,
        fitness_function: Optional[Callable[[Chromosome], float]] = None,
        logger: Optional[logging.Logger] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the genetic algorithm engine.

        Args:
            config: Run configuration (an EvolverConfig, bare EvolutionParameters
                or a mapping of either)
            fitness_function: Function scoring a chromosome in [0, 1]; defaults
                to closeness to ``config.evolution.target``
            logger: Optional logger instance
            rng: Source of randomness; seeded from ``config.random_seed`` if omitted

        Raises:
            ConfigurationError: If the configuration is malformed
        """
        self.config = coerce_config(config)
        self.params = self.config.evolution
        self.logger = logger or self._setup_logger()

        if fitness_function is None:
            fitness_function = TargetFitness(self.params.target)
        if self.config.fitness.cache_size > 0 and isinstance(fitness_function, FitnessFunction):
            fitness_function = CachedFitnessFunction(fitness_function, self.config.fitness.cache_size)
        self.fitness_function = fitness_function

        self.rng = rng if rng is not None else random.Random(self.config.random_seed)

        # State tracking
        self.generation = 0
        self.total_evaluations = 0
        self.history: List[Dict[str, Any]] = []
        self.start_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        """Setup default logger."""
        logger = logging.getLogger("evolver.engine")
        if self.config.logging.enable_logging:
            logger.setLevel(getattr(logging, self.config.logging.log_level))
        else:
            logger.setLevel(logging.WARNING)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def run(self) -> WinnerReport:
        """
        Evolve for the configured number of generations and report the winner.

        Returns:
            The best organism of the final generation
        """
        with logfire.span("GA Evolution",
                          population_size=self.params.population_size,
                          generations=self.params.generation_limit,
                          target=self.params.target):
            final_population = self.evolve()
            winner = self.select_winner(final_population)

            elapsed_time = datetime.now() - self.start_time
            self.logger.info(f"Evolution completed in {elapsed_time}")
            return winner

    def evolve(self, initial_population: Optional[List[Chromosome]] = None) -> List[Chromosome]:
        """
        Run the generational loop.

        Args:
            initial_population: Optional pre-built generation 0; random otherwise

        Returns:
            The chromosomes of generation ``generation_limit``
        """
        self.start_time = datetime.now()
        self.logger.info("Initializing population...")

        if initial_population is not None:
            chromosomes = list(initial_population)
        else:
            chromosomes = self.initialize_population()

        if len(chromosomes) != self.params.population_size:
            raise ValueError(
                f"Initial population has {len(chromosomes)} chromosomes, "
                f"expected {self.params.population_size}"
            )

        self.generation = 0
        while self.generation < self.params.generation_limit:
            with logfire.span("Generation", generation=self.generation):
                chromosomes = self.step(chromosomes)
            self.generation += 1

        self.logger.info(f"Generation: {self.generation}")
        return chromosomes

    def initialize_population(self) -> List[Chromosome]:
        """Create generation 0 as random chromosomes (without fitness)."""
        with logfire.span("Initialize Population"):
            chromosomes = [
                Chromosome.random(self.params.chromosome_length, self.rng)
                for _ in range(self.params.population_size)
            ]
            self.logger.info(f"Initialized population with {len(chromosomes)} chromosomes")
            return chromosomes

    def step(self, chromosomes: List[Chromosome]) -> List[Chromosome]:
        """
        Perform one generational transition.

        Args:
            chromosomes: Raw chromosomes of the current generation

        Returns:
            Raw chromosomes of the next generation
        """
        if self.generation % self.config.logging.log_interval == 0:
            self.logger.info(f"Generation: {self.generation}")

        population = self.evaluate_population(chromosomes)

        stats = population.calculate_statistics()
        self.history.append(stats)
        if self.generation % self.config.logging.log_interval == 0:
            self._log_progress(stats)

        return self.create_next_generation(population)

    def evaluate_population(self, chromosomes: List[Chromosome]) -> Population:
        """Score every chromosome against the target."""
        with logfire.span("Evaluate Population", size=len(chromosomes)):
            population = Population.evaluate(
                chromosomes,
                self.fitness_function,
                generation=self.generation
            )
            self.total_evaluations += len(chromosomes)
            return population

    def create_next_generation(self, population: Population) -> List[Chromosome]:
        """Produce ``population_size`` children, two per reproduction round."""
        with logfire.span("Create Next Generation"):
            new_chromosomes: List[Chromosome] = []

            for _ in range(self.params.population_size // 2):
                new_chromosomes.extend(self.reproduce(population))

            return new_chromosomes

    def reproduce(self, population: Population) -> Tuple[Chromosome, Chromosome]:
        """Select two parents, cross them over and mutate both children."""
        parent1, parent2 = population.select_parents(self.rng)

        child1, child2 = parent1.chromosome.crossover(
            parent2.chromosome,
            self.params.crossover_rate,
            self.rng
        )

        return (
            child1.mutate(self.params.mutation_rate, self.rng),
            child2.mutate(self.params.mutation_rate, self.rng)
        )

    def select_winner(self, chromosomes: List[Chromosome]) -> WinnerReport:
        """Re-score the final generation and report its best organism."""
        with logfire.span("Select Winner"):
            population = self.evaluate_population(chromosomes)
            winner = WinnerReport.from_organism(population.best(), self.generation)

            self.logger.info(
                f"Winner: {winner.clean_phenotype!r} = {winner.result} "
                f"(fitness {winner.fitness:.5f})"
            )
            return winner

    def _log_progress(self, stats: Dict[str, Any]) -> None:
        """Log evolution progress."""
        self.logger.debug(
            f"Generation {self.generation}: "
            f"Best: {stats.get('best_fitness', 0):.4f}, "
            f"Avg: {stats.get('avg_fitness', 0):.4f}, "
            f"Unevaluable: {stats.get('unevaluable_count', 0)}"
        )

        if self.config.logging.metrics_export:
            metrics = {
                "evolution_generation": self.generation,
                **{k: v for k, v in stats.items() if k != "generation"}
            }
            logfire.info("Evolution Progress", **metrics)


def run(
    config: ConfigLike,
    rng: Optional[random.Random] = None,
    logger: Optional[logging.Logger] = None
) -> WinnerReport:
    """
    Evolve an expression for the configured target and return the winner.

    Args:
        config: Run configuration
        rng: Optional source of randomness for reproducible runs
        logger: Optional logger instance

    Raises:
        ConfigurationError: If the configuration is malformed
    """
    engine = GeneticAlgorithmEngine(config, logger=logger, rng=rng)
    return engine.run()
