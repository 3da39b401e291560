"""Command execution backends."""
