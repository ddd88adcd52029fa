"""Domain layer for evaluation events."""
