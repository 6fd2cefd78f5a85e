"""Tenancy hierarchy feature."""
