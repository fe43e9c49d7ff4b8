"""Command-line interface for STORYLINE."""
