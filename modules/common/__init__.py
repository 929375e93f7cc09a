"""Shared helpers: colored logging, formatting and progress display."""
