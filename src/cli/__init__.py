"""Command-line interface for Tally reports."""
