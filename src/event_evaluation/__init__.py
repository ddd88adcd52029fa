"""Evaluation events core: scheduling, assignment, scoring and progress."""

__version__ = "0.1.0"
