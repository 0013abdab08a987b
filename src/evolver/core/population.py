"""
Population Management for the Expression Genetic Algorithm.

This module holds the scored view of one generation: organisms (a chromosome
paired with its freshly computed fitness), fitness-proportionate parent
selection, winner selection and population statistics.
"""

from typing import List, Optional, Dict, Any, Callable, Sequence
from dataclasses import dataclass
import logging
import random
import statistics

import numpy as np

from src.evolver.core.chromosome import Chromosome

logger = logging.getLogger("evolver.population")


@dataclass(frozen=True)
class Organism:
    """
    A chromosome together with its fitness against the current target.

    Organisms only live for one generation; the engine carries raw
    chromosomes between generations and re-scores them each time.
    """

    chromosome: Chromosome
    fitness: float

    @property
    def id(self) -> str:
        """Get the organism's content identifier."""
        return self.chromosome.chromosome_id

    def phenotype(self) -> str:
        return self.chromosome.phenotype()

    def clean_phenotype(self) -> str:
        return self.chromosome.clean_phenotype()

    def to_dict(self) -> Dict[str, Any]:
        """Convert organism to dictionary representation."""
        return {
            "chromosome": self.chromosome.to_dict(),
            "clean_phenotype": self.clean_phenotype(),
            "fitness": self.fitness
        }


class Population:
    """
    A scored generation of organisms.

    The population is built once per generation from raw chromosomes and is
    never modified afterwards; selection reads from a fixed fitness snapshot.
    """

    def __init__(self, organisms: Sequence[Organism], generation: int = 0):
        """Initialize population with already scored organisms."""
        self.organisms: List[Organism] = list(organisms)
        self.generation = generation
        self._cumulative: Optional[np.ndarray] = None

    @classmethod
    def evaluate(
        cls,
        chromosomes: Sequence[Chromosome],
        fitness_function: Callable[[Chromosome], float],
        generation: int = 0
    ) -> "Population":
        """
        Score every chromosome and build the population.

        Args:
            chromosomes: Raw chromosomes of one generation
            fitness_function: Maps a chromosome to a score in [0, 1]
            generation: Generation number the chromosomes belong to
        """
        organisms = [
            Organism(chromosome=chromosome, fitness=fitness_function(chromosome))
            for chromosome in chromosomes
        ]
        return cls(organisms, generation=generation)

    def __len__(self) -> int:
        return len(self.organisms)

    def __iter__(self):
        return iter(self.organisms)

    @property
    def fitnesses(self) -> List[float]:
        return [org.fitness for org in self.organisms]

    @property
    def total_fitness(self) -> float:
        return float(sum(self.fitnesses))

    def cumulative_fitness(self) -> np.ndarray:
        """Running sum of fitness across the population, in order."""
        if self._cumulative is None:
            self._cumulative = np.cumsum(np.asarray(self.fitnesses, dtype=float))
        return self._cumulative

    def roulette_select(self, rng: random.Random) -> Organism:
        """
        Select one organism with probability proportional to its fitness.

        A number ``r`` is drawn uniformly from ``[0, total_fitness)`` and the
        first organism whose cumulative fitness exceeds ``r`` is chosen, so
        organisms with zero fitness are never picked while the total is
        positive. When no organism qualifies (for example every fitness is 0)
        the last organism is returned.

        Args:
            rng: Source of randomness

        Returns:
            The selected organism
        """
        if not self.organisms:
            raise ValueError("Cannot select from an empty population")

        cumulative = self.cumulative_fitness()
        total = float(cumulative[-1])
        r = rng.random() * total

        if total > 0:
            index = int(np.searchsorted(cumulative, r, side="right"))
            if index < len(self.organisms):
                return self.organisms[index]

        logger.debug(
            f"Roulette selection fell back to the last organism "
            f"(total fitness {total}, r={r})"
        )
        return self.organisms[-1]

    def select_parents(self, rng: random.Random) -> List[Organism]:
        """Draw two parents independently; both draws may pick the same organism."""
        return [self.roulette_select(rng), self.roulette_select(rng)]

    def best(self) -> Organism:
        """Organism with maximum fitness; ties go to the earliest one."""
        if not self.organisms:
            raise ValueError("Cannot pick the best of an empty population")
        return max(self.organisms, key=lambda org: org.fitness)

    def calculate_statistics(self) -> Dict[str, Any]:
        """Calculate population statistics."""
        fitnesses = self.fitnesses

        if not fitnesses:
            return {}

        return {
            "generation": self.generation,
            "population_size": len(fitnesses),
            "best_fitness": max(fitnesses),
            "worst_fitness": min(fitnesses),
            "avg_fitness": statistics.mean(fitnesses),
            "median_fitness": statistics.median(fitnesses),
            "fitness_std": statistics.stdev(fitnesses) if len(fitnesses) > 1 else 0,
            "unevaluable_count": sum(1 for f in fitnesses if f == 0),
            "unique_chromosomes": len({org.chromosome for org in self.organisms}),
        }
