"""Determinism verification for generated documentation."""
