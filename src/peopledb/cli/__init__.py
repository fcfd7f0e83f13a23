"""Command-line interface and interactive shell."""
