"""Command-line interface for asmdoc."""
