"""
Core functionality for the Expression Evolver.

This package contains process-level configuration shared by the driver.
"""

from src.core.config import settings

__all__ = [
    "settings",
]
