"""Shared helpers for pipedef."""
