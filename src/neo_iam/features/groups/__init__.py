"""Group membership feature."""
