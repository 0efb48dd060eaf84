"""Infrastructure layer - persistence, messaging and logging adapters."""
