"""Application layer: use cases, services and ports."""
