"""Application layer: ports and the override lifecycle services."""
