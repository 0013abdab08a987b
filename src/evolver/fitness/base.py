"""
Base classes for fitness evaluation in the expression genetic algorithm.

This module provides the abstract fitness-function interface and a caching
wrapper for deterministic fitness functions.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

from src.evolver.core.chromosome import Chromosome


@dataclass
class FitnessMetrics:
    """Base class for fitness metrics."""
    score: float  # Overall fitness score [0, 1]
    details: Dict[str, Any]  # Detailed breakdown of the score


class FitnessFunction(ABC):
    """
    Abstract base class for fitness functions.

    All fitness functions should inherit from this class and implement
    the evaluate method to score chromosomes.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize fitness function with optional configuration.

        Args:
            config: Configuration parameters for the fitness function
        """
        self.config = config or {}

    @abstractmethod
    def evaluate(self, chromosome: Chromosome) -> float:
        """
        Evaluate a chromosome and return a fitness score.

        Args:
            chromosome: The chromosome to evaluate

        Returns:
            Fitness score between 0 and 1, where 1 is optimal
        """
        pass

    @abstractmethod
    def calculate_metrics(self, chromosome: Chromosome) -> FitnessMetrics:
        """
        Calculate detailed metrics for a chromosome.

        Args:
            chromosome: The chromosome to analyze

        Returns:
            Detailed fitness metrics including score and breakdown
        """
        pass

    def __call__(self, chromosome: Chromosome) -> float:
        return self.evaluate(chromosome)


class CachedFitnessFunction(FitnessFunction):
    """
    Decorator class that adds caching to fitness functions.

    Only valid for deterministic fitness functions: the key is the
    chromosome's content, so a changed chromosome is always re-scored.
    """

    def __init__(self, fitness_function: FitnessFunction, cache_size: int = 1000):
        """
        Initialize cached fitness function.

        Args:
            fitness_function: The fitness function to wrap
            cache_size: Maximum number of evaluations to cache
        """
        super().__init__(fitness_function.config)
        self.fitness_function = fitness_function
        self.cache_size = cache_size
        self.cache: Dict[str, float] = {}
        self.access_order: List[str] = []
        self.hits = 0
        self.misses = 0

    def _get_cache_key(self, chromosome: Chromosome) -> str:
        """Generate cache key for chromosome."""
        return " ".join(g.to_string() for g in chromosome)

    def evaluate(self, chromosome: Chromosome) -> float:
        """
        Evaluate with caching.

        Args:
            chromosome: The chromosome to evaluate

        Returns:
            Cached or computed fitness score
        """
        cache_key = self._get_cache_key(chromosome)

        if cache_key in self.cache:
            # Move to end (LRU)
            self.access_order.remove(cache_key)
            self.access_order.append(cache_key)
            self.hits += 1
            return self.cache[cache_key]

        self.misses += 1
        score = self.fitness_function.evaluate(chromosome)

        self.cache[cache_key] = score
        self.access_order.append(cache_key)

        # Evict oldest if cache full
        if len(self.cache) > self.cache_size:
            oldest = self.access_order.pop(0)
            del self.cache[oldest]

        return score

    def calculate_metrics(self, chromosome: Chromosome) -> FitnessMetrics:
        """Pass through to wrapped function."""
        return self.fitness_function.calculate_metrics(chromosome)

    def clear_cache(self):
        """Clear the evaluation cache."""
        self.cache.clear()
        self.access_order.clear()
