"""Geometry, history and logging helpers."""
