"""Shared utilities — exit codes, canonical JSON, determinism helpers."""
