"""Domain layer - garden aggregate and shared kernel."""
