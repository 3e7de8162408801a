"""Drag session and rotation HUD values for the manipulation engine.

A DragSession is the single, short-lived context of one pointer gesture.
The engine owns at most one; starting a new gesture replaces it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from models.transform import Vec2, Rect


@dataclass(frozen=True)
class DragSession:
    """Pointer gesture state captured on press.

    kind selects the handle family ('simple', 'rect', 'line') and mode the
    handle inside it ('move', 'rotate', 'nw', 'p1', ...).
    """
    kind: str
    mode: str
    block_id: str
    start_x: float  # client pixels
    start_y: float
    start_rect: Optional[Rect] = None
    start_rotation: float = 0.0
    start_points: Optional[Tuple[Vec2, Vec2]] = None
    center: Optional[Vec2] = None  # rotation pivot, percent space
    start_cursor_angle: float = 0.0  # radians
    prev_cursor: str = ''

    @property
    def is_rotate(self) -> bool:
        return self.mode == 'rotate'


@dataclass(frozen=True)
class RotationHud:
    """Live rotation readout shown next to the cursor while rotating."""
    active: bool = False
    deg: int = 0
    cursor_x: float = 0.0  # surface-relative pixels
    cursor_y: float = 0.0
    target_id: Optional[str] = None

    @classmethod
    def inactive(cls) -> 'RotationHud':
        return cls()


@dataclass(frozen=True)
class DragUpdate:
    """Result of one pointer move: a block patch plus an optional HUD angle."""
    patch: dict
    hud_deg: Optional[float] = None
