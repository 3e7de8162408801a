"""
Drone Report Editor - Editor Store

Session state and operations, composed from mixins.
"""

from .editor_store import EditorStore
from .config_mixin import EditorConfig

__all__ = ['EditorStore', 'EditorConfig']
