"""Pointer manipulation of user blocks: drag sessions, handles and the engine."""

from .drag_session import DragSession, RotationHud, DragUpdate
from .handles import Handle
from .modes import DRAG_MODES
from .manipulation_engine import ManipulationEngine

__all__ = ['DragSession', 'RotationHud', 'DragUpdate', 'Handle', 'DRAG_MODES', 'ManipulationEngine']
