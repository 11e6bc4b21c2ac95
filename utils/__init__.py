"""Shared helpers: calendar arithmetic and input validation."""
