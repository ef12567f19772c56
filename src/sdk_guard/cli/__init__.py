"""Command-line interface for sdk-guard."""
