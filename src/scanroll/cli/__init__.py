"""Command-line interface for Scanroll."""
