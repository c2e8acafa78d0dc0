"""Constant tables shared across Scanroll modules."""
