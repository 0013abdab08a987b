"""
Evolver fitness functions.

This module provides the arithmetic expression evaluator and the fitness
function that scores chromosomes by how close their expression comes to the
target number.
"""

from src.evolver.fitness.base import (
    FitnessFunction,
    FitnessMetrics,
    CachedFitnessFunction
)

from src.evolver.fitness.expression import (
    ExpressionEvaluator,
    evaluate_expression
)

from src.evolver.fitness.metrics import TargetMetrics

from src.evolver.fitness.target import (
    TargetFitness,
    fitness,
    score_result
)

__all__ = [
    "FitnessFunction",
    "FitnessMetrics",
    "CachedFitnessFunction",
    "ExpressionEvaluator",
    "evaluate_expression",
    "TargetMetrics",
    "TargetFitness",
    "fitness",
    "score_result",
]
