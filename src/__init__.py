"""
Expression Evolver - Source Package

This package contains a binary-encoded genetic algorithm that searches for an
arithmetic expression evaluating to a target number.
"""

__version__ = "1.0.0"

# Package-level imports for convenience
from src.core.config import settings

__all__ = [
    "settings",
    "__version__",
]
