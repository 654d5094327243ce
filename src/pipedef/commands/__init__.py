"""Command implementations for the pipedef CLI."""
