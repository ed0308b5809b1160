"""CLI commands for playmap."""
