"""Command-line interface for fitting placement."""
