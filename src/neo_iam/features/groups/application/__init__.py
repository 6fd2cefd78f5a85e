"""Group application layer."""
