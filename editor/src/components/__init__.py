"""Interaction components for the Drone Report Editor

This package contains the presentation-facing controllers:
- manipulation: pointer-drag state machines, handles and keyboard routing

Components never render; they translate input events into store operations.
"""

from .manipulation import ManipulationEngine, DragSession, RotationHud

__all__ = [
    'ManipulationEngine',
    'DragSession',
    'RotationHud',
]
