"""Shared utilities for playmap."""
