"""Command-line interface for the engine installer."""
