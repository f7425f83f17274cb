"""Utility helpers: errors and logging."""
