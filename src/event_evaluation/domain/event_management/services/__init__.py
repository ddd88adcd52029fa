"""Event Management domain services."""

from .progress_calculator import ProgressCalculator

__all__ = ["ProgressCalculator"]
