"""Command-line interface for lockforge."""
