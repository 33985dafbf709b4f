"""Domain layer for LogFlow: override entities, events and errors."""
