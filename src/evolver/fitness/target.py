"""
Target-number fitness for expression chromosomes.

A chromosome is cleaned, decoded and evaluated as an arithmetic expression;
the score is ``1 / (|target - result| + 1)``. The score is 1 only on an exact
match and never reaches 0 for a finite result, so 0 is reserved for
expressions with no value (empty, division by zero, non-finite).
"""

from typing import Dict, Any, Optional

from src.evolver.core.chromosome import Chromosome
from src.evolver.fitness.base import FitnessFunction
from src.evolver.fitness.expression import ExpressionEvaluator
from src.evolver.fitness.metrics import TargetMetrics


def score_result(result: Optional[float], target: float) -> float:
    """Fitness of an evaluated expression result against the target."""
    if result is None:
        return 0.0
    return 1.0 / (abs(target - result) + 1.0)


class TargetFitness(FitnessFunction):
    """
    Fitness function that rewards expressions evaluating close to a target.
    """

    def __init__(
        self,
        target: float,
        evaluator: Optional[ExpressionEvaluator] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize target fitness function.

        Args:
            target: The number the expression should evaluate to
            evaluator: Expression evaluator (a shared default if omitted)
            config: Additional configuration parameters
        """
        super().__init__(config)
        self.target = float(target)
        self.evaluator = evaluator or ExpressionEvaluator()

    def evaluate(self, chromosome: Chromosome) -> float:
        """
        Evaluate the fitness of a chromosome.

        Args:
            chromosome: The chromosome to evaluate

        Returns:
            Fitness score between 0 and 1
        """
        return self.calculate_metrics(chromosome).score

    def evaluate_expression(self, chromosome: Chromosome) -> Optional[float]:
        """Numeric value of the chromosome's clean phenotype, or None."""
        return self.evaluator.evaluate(chromosome.clean_phenotype())

    def calculate_metrics(self, chromosome: Chromosome) -> TargetMetrics:
        """
        Calculate detailed metrics for a chromosome.

        Args:
            chromosome: The chromosome to analyze

        Returns:
            Target metrics including the evaluated result and its error
        """
        cleaned = chromosome.clean()
        expression = cleaned.phenotype()
        result = self.evaluator.evaluate(expression)

        return TargetMetrics(
            expression=expression,
            result=result,
            target=self.target,
            absolute_error=abs(self.target - result) if result is not None else None,
            score=score_result(result, self.target),
            details={
                "raw_genes": len(chromosome),
                "clean_genes": len(cleaned),
                "junk_genes": sum(1 for g in chromosome if g.is_junk),
            }
        )


def fitness(chromosome: Chromosome, target: float) -> float:
    """Fitness of ``chromosome`` against ``target``, in [0, 1]."""
    return TargetFitness(target).evaluate(chromosome)
