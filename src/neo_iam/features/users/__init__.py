"""User feature."""
