"""Command-line interface for meshdecode."""
