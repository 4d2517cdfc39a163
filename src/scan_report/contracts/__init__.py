"""Contracts — bundled JSON schemas and validation helpers."""
