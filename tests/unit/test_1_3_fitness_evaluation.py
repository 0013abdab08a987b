"""
Unit tests for expression evaluation and target fitness.

Tests cover:
- Standard precedence and associativity of the evaluator
- "No value" outcomes (empty, division by zero)
- Rejection of text outside the arithmetic grammar
- The fitness formula, its bounds and its symmetry
- The fitness cache wrapper
"""

import pytest

from src.evolver import Chromosome, TargetFitness, fitness
from src.evolver.fitness import (
    CachedFitnessFunction,
    ExpressionEvaluator,
    FitnessMetrics,
    evaluate_expression,
    score_result
)


class TestExpressionEvaluator:
    """Test suite for the arithmetic evaluator."""

    @pytest.fixture
    def evaluator(self):
        return ExpressionEvaluator()

    @pytest.mark.parametrize("expression,expected", [
        ("7", 7.0),
        ("6 + 5 * 4 / 2 + 1", 17.0),
        ("2 + 3 * 4", 14.0),
        ("8 - 3 - 2", 3.0),
        ("8 / 4 / 2", 1.0),
        ("9 - 2 * 3 + 1", 4.0),
        ("1 / 4", 0.25),
        ("6 * 7", 42.0),
    ])
    def test_standard_precedence(self, evaluator, expression, expected):
        """Multiplication binds tighter; equal precedence is left-associative."""
        assert evaluator.evaluate(expression) == pytest.approx(expected)

    def test_empty_expression_has_no_value(self, evaluator):
        assert evaluator.evaluate("") is None
        assert evaluator.evaluate("   ") is None

    @pytest.mark.parametrize("expression", ["5 / 0", "0 / 0", "1 + 2 / 0 * 3"])
    def test_division_by_zero_has_no_value(self, evaluator, expression):
        assert evaluator.evaluate(expression) is None

    def test_result_is_float(self, evaluator):
        assert isinstance(evaluator.evaluate("3 + 4"), float)

    @pytest.mark.parametrize("expression", [
        "6 +",
        "(junk)",
        "2 ** 3",
        "__import__('os')",
        "True + 1",
        "'a'",
    ])
    def test_rejects_non_arithmetic_text(self, evaluator, expression):
        with pytest.raises(ValueError):
            evaluator.evaluate(expression)

    def test_module_level_helper(self):
        assert evaluate_expression("1 + 1") == 2.0

    def test_long_chain_of_operators(self, evaluator):
        """Length of an expression is not limited by recursion depth."""
        assert evaluator.evaluate(" + ".join(["1"] * 5001)) == 5001.0
        assert evaluator.evaluate(" - ".join(["9"] + ["1"] * 6000)) == -5991.0
        assert evaluator.evaluate(" + ".join(["2 * 3"] * 4000)) == 24000.0


class TestTargetFitness:
    """Test suite for the target fitness function."""

    def test_worked_example(self, example_chromosome):
        """6 + 5 * 4 / 2 + 1 = 17, so the error against 42 is 25."""
        assert fitness(example_chromosome, 42) == pytest.approx(1 / 26)
        assert fitness(example_chromosome, 42) == pytest.approx(0.03846, abs=1e-5)

    def test_exact_match_scores_one(self, forty_two_chromosome):
        assert fitness(forty_two_chromosome, 42) == 1.0

    def test_inexact_match_scores_below_one(self, forty_two_chromosome):
        assert 0 < fitness(forty_two_chromosome, 41.5) < 1

    def test_empty_expression_scores_zero(self):
        assert fitness(Chromosome(), 42) == 0.0
        assert fitness(Chromosome.from_string("1111"), 42) == 0.0

    def test_division_by_zero_scores_zero(self):
        assert fitness(Chromosome.from_string("0101 11 0000"), 42) == 0.0
        assert fitness(Chromosome.from_string("0000 11 0000"), 0) == 0.0

    def test_symmetric_in_error(self):
        """A result of target+d scores the same as target-d."""
        seven = Chromosome.from_string("0111")
        thirteen = Chromosome.from_string("0110 00 0111")

        assert fitness(seven, 10) == fitness(thirteen, 10) == 0.25

    def test_monotone_in_error(self):
        assert score_result(40, 42) > score_result(30, 42) > score_result(-100, 42) > 0

    def test_no_value_scores_zero(self):
        assert score_result(None, 42) == 0.0

    def test_fitness_within_bounds(self, random_chromosomes):
        scorer = TargetFitness(42)
        for chromosome in random_chromosomes:
            assert 0.0 <= scorer.evaluate(chromosome) <= 1.0

    def test_calculate_metrics(self, example_chromosome):
        metrics = TargetFitness(42).calculate_metrics(example_chromosome)

        assert metrics.expression == "6 + 5 * 4 / 2 + 1"
        assert metrics.result == 17.0
        assert metrics.absolute_error == 25.0
        assert metrics.score == pytest.approx(1 / 26)
        assert metrics.evaluable
        assert not metrics.exact
        assert metrics.details["junk_genes"] == 1
        assert metrics.details["clean_genes"] == 9

    def test_metrics_without_value(self):
        metrics = TargetFitness(3).calculate_metrics(Chromosome.from_string("1111"))

        assert metrics.result is None
        assert metrics.absolute_error is None
        assert metrics.score == 0.0
        assert not metrics.evaluable

    def test_fitness_function_is_callable(self, forty_two_chromosome):
        assert TargetFitness(42)(forty_two_chromosome) == 1.0

    def test_metrics_are_fitness_metrics(self, example_chromosome):
        metrics = TargetFitness(42).calculate_metrics(example_chromosome)

        assert isinstance(metrics, FitnessMetrics)

    def test_very_long_chromosome(self):
        """Several thousand genes still clean and evaluate to a value."""
        chromosome = Chromosome.from_string(" ".join(["0001", "00"] * 3000 + ["0001"]))

        assert len(chromosome) == 6001
        assert fitness(chromosome, 3001) == 1.0


class TestCachedFitness:
    """Test suite for the caching wrapper."""

    def test_cache_hits_for_equal_chromosomes(self, example_chromosome):
        cached = CachedFitnessFunction(TargetFitness(42), cache_size=10)
        copy = Chromosome.from_dict(example_chromosome.to_dict())

        first = cached.evaluate(example_chromosome)
        second = cached.evaluate(copy)

        assert first == second
        assert cached.misses == 1
        assert cached.hits == 1

    def test_cache_evicts_oldest(self):
        cached = CachedFitnessFunction(TargetFitness(42), cache_size=2)
        for text in ["0001", "0010", "0011"]:
            cached.evaluate(Chromosome.from_string(text))

        assert len(cached.cache) == 2
        assert "0001" not in cached.cache

    def test_clear_cache(self, example_chromosome):
        cached = CachedFitnessFunction(TargetFitness(42))
        cached.evaluate(example_chromosome)
        cached.clear_cache()

        assert not cached.cache
