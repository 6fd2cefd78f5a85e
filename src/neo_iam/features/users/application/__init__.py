"""User application layer."""
