"""Command-line interface for the cutting-stock optimizer."""
