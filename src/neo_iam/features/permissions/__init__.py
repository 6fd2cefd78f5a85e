"""Roles, permissions and their assignment to users."""
