"""Service layer - tool use cases."""
