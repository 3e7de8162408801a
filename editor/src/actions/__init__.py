"""Typed commands driving the editor store."""
