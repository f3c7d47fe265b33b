"""Command-line interface for clipcat."""
