"""
Arithmetic expression evaluation for cleaned phenotypes.

Expressions are split into number and operator tokens and reduced with an
operator stack, so ``*`` and ``/`` bind tighter than ``+`` and ``-`` and
operators of equal precedence associate left to right. Evaluation is
iterative; the length of an expression is not limited by recursion depth.
Only non-negative numeric literals and ``+ - * /`` are accepted.
"""

from typing import Callable, Dict, List, Optional, Tuple
import math
import operator
import re


_TOKEN_PATTERN = re.compile(r"\s*(?:(\d+(?:\.\d+)?)|([+\-*/]))")


class ExpressionEvaluator:
    """
    Safe evaluator for ``number (operator number)*`` style expressions.

    Arithmetic is done on floats. Division by zero, overflow and non-finite
    results all produce ``None`` ("no value") instead of an exception.
    """

    BINARY_OPERATORS: Dict[str, Callable[[float, float], float]] = {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": operator.truediv,
    }

    PRECEDENCE: Dict[str, int] = {"+": 1, "-": 1, "*": 2, "/": 2}

    def evaluate(self, expression: str) -> Optional[float]:
        """
        Evaluate an arithmetic expression.

        Args:
            expression: Expression text, e.g. ``"6 + 5 * 4 / 2 + 1"``

        Returns:
            The numeric result, or None for an empty expression or an
            undefined result

        Raises:
            ValueError: If the text is not an arithmetic expression over
                numbers and ``+ - * /``
        """
        if not expression.strip():
            return None

        numbers, operators = self.parse(expression)

        try:
            result = self._reduce(numbers, operators)
        except (ZeroDivisionError, OverflowError):
            return None

        if math.isnan(result) or math.isinf(result):
            return None
        return result

    def parse(self, expression: str) -> Tuple[List[float], List[str]]:
        """
        Split expression text into its operands and operators.

        Returns:
            Operands and the operators between them, so there is always
            exactly one more operand than operators
        """
        text = expression.strip()
        numbers: List[float] = []
        operators: List[str] = []
        position = 0

        while position < len(text):
            match = _TOKEN_PATTERN.match(text, position)
            if match is None:
                raise ValueError(f"Malformed expression: {expression!r}")
            number, symbol = match.groups()
            expecting_number = len(numbers) == len(operators)
            if expecting_number != (number is not None):
                raise ValueError(f"Malformed expression: {expression!r}")
            if number is not None:
                numbers.append(float(number))
            else:
                operators.append(symbol)
            position = match.end()

        if len(numbers) != len(operators) + 1:
            raise ValueError(f"Malformed expression: {expression!r}")
        return numbers, operators

    def _reduce(self, numbers: List[float], operators: List[str]) -> float:
        values = [numbers[0]]
        pending: List[str] = []

        for symbol, number in zip(operators, numbers[1:]):
            while pending and self.PRECEDENCE[pending[-1]] >= self.PRECEDENCE[symbol]:
                self._apply(values, pending.pop())
            pending.append(symbol)
            values.append(number)

        while pending:
            self._apply(values, pending.pop())
        return values[0]

    def _apply(self, values: List[float], symbol: str) -> None:
        right = values.pop()
        left = values.pop()
        values.append(self.BINARY_OPERATORS[symbol](left, right))


_default_evaluator = ExpressionEvaluator()


def evaluate_expression(expression: str) -> Optional[float]:
    """Evaluate an expression with the shared evaluator."""
    return _default_evaluator.evaluate(expression)
