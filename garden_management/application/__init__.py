"""Application layer - use cases orchestrating the garden aggregate."""
