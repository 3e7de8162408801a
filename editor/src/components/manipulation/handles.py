"""Manipulation handle system - ABC-based handle architecture.

Each handle type is a class that knows:
- Which cursor to show while it is dragged
- How to turn a pointer delta into a block patch

Handles are pure: they read the DragSession captured on press and return a
DragUpdate. All geometry is in page-percent units; the engine converts the
pixel delta with the live surface size before calling drag().
"""

import math
from abc import ABC, abstractmethod

from models.transform import Vec2, Rect
from utils.geometry import (
    clamp_rect, clamp_points, clamp_percent, normalize_degrees, snap_rotation,
    angle_between, rotate_point, segment_degrees
)
from .drag_session import DragUpdate
from constants import (
    MIN_W, MIN_H, PERCENT_MAX,
    RECT_ROTATION_SPECIALS, LINE_ROTATION_SPECIALS,
    CURSOR_MOVE, CURSOR_EW_RESIZE, CURSOR_NWSE_RESIZE, CURSOR_GRABBING
)


def _fit_resized(x, y, w, h):
    """Fit a resized rect by trimming its far edges rather than moving it."""
    x = clamp_percent(x)
    y = clamp_percent(y)
    w = max(MIN_W, w)
    h = max(MIN_H, h)
    if x + w > PERCENT_MAX:
        w = PERCENT_MAX - x
    if y + h > PERCENT_MAX:
        h = PERCENT_MAX - y
    return clamp_rect(Rect(x, y, w, h))


class Handle(ABC):
    """Abstract base class for manipulation handles."""

    cursor = CURSOR_MOVE

    @abstractmethod
    def drag(self, session, dx, dy, pointer, shift):
        """Handle drag operation for this handle type.

        Args:
            session: DragSession captured on press
            dx, dy: Pointer delta since press, percent units
            pointer: Current pointer position, clamped percent Vec2
            shift: Whether Shift is held (rotation snapping)

        Returns:
            DragUpdate: Patch to apply to the dragged block
        """


# ======================================================================
# Simple drag (text / image)
# ======================================================================

class SimpleMoveHandle(Handle):
    """Translate the whole rect."""

    cursor = CURSOR_MOVE

    def drag(self, session, dx, dy, pointer, shift):
        r = session.start_rect
        return DragUpdate({'rect': clamp_rect(Rect(r.x + dx, r.y + dy, r.w, r.h)).to_dict()})


class SimpleResizeHandle(Handle):
    """Resize from the top-left corner or the right edge."""

    def __init__(self, mode):
        """
        Args:
            mode: 'resize-tl' or 'resize-right'
        """
        self.mode = mode
        self.cursor = CURSOR_EW_RESIZE if mode == 'resize-right' else CURSOR_NWSE_RESIZE

    def drag(self, session, dx, dy, pointer, shift):
        r = session.start_rect
        x, y, w, h = r.x, r.y, r.w, r.h
        if self.mode == 'resize-right':
            w += dx
        else:
            x += dx
            y += dy
            w -= dx
            h -= dy

        w = max(MIN_W, w)
        h = max(MIN_H, h)
        # Crossing the page edge eats into the size instead of moving the far edge
        if x < 0:
            w += x
            x = 0.0
        if y < 0:
            h += y
            y = 0.0
        if x + w > PERCENT_MAX:
            w = PERCENT_MAX - x
        if y + h > PERCENT_MAX:
            h = PERCENT_MAX - y
        return DragUpdate({'rect': clamp_rect(Rect(x, y, w, h)).to_dict()})


# ======================================================================
# Rect / ellipse / section drag
# ======================================================================

class RectMoveHandle(Handle):
    """Translate a rotatable shape, keeping its size."""

    cursor = CURSOR_MOVE

    def drag(self, session, dx, dy, pointer, shift):
        r = session.start_rect
        return DragUpdate({'rect': clamp_rect(Rect(r.x + dx, r.y + dy, r.w, r.h)).to_dict()})


class RectResizeHandle(Handle):
    """Compass handle: only the edges named by the letters move."""

    cursor = CURSOR_NWSE_RESIZE

    def __init__(self, compass):
        """
        Args:
            compass: 'n', 's', 'e', 'w', 'ne', 'nw', 'se' or 'sw'
        """
        self.compass = compass
        self.has_n = 'n' in compass
        self.has_s = 's' in compass
        self.has_e = 'e' in compass
        self.has_w = 'w' in compass

    def drag(self, session, dx, dy, pointer, shift):
        r = session.start_rect
        x, y, w, h = r.x, r.y, r.w, r.h

        if self.has_e:
            w = r.w + dx
        if self.has_s:
            h = r.h + dy
        if self.has_w:
            x = r.x + dx
            w = r.w - dx
        if self.has_n:
            y = r.y + dy
            h = r.h - dy

        # Below the minimum the opposite edge stays pinned
        if w < MIN_W:
            if self.has_w:
                x -= MIN_W - w
            w = MIN_W
        if h < MIN_H:
            if self.has_n:
                y -= MIN_H - h
            h = MIN_H

        return DragUpdate({'rect': _fit_resized(x, y, w, h).to_dict()})


class RectRotateHandle(Handle):
    """Rotate about the rect center; Shift snaps."""

    cursor = CURSOR_GRABBING

    def drag(self, session, dx, dy, pointer, shift):
        current = angle_between(pointer, session.center)
        deg = session.start_rotation + math.degrees(current - session.start_cursor_angle)
        if shift:
            deg = snap_rotation(deg, RECT_ROTATION_SPECIALS)
        deg = normalize_degrees(deg)
        return DragUpdate({'rotation': deg}, hud_deg=deg)


# ======================================================================
# Line drag
# ======================================================================

class LineEndpointHandle(Handle):
    """Drag one endpoint; the other never moves."""

    cursor = CURSOR_MOVE

    def __init__(self, endpoint):
        """
        Args:
            endpoint: 'p1' or 'p2'
        """
        self.endpoint = endpoint

    def drag(self, session, dx, dy, pointer, shift):
        p1, p2 = session.start_points
        if self.endpoint == 'p1':
            p1 = Vec2(p1.x + dx, p1.y + dy)
        else:
            p2 = Vec2(p2.x + dx, p2.y + dy)
        return DragUpdate({'points': clamp_points([p1, p2])})


class LineMoveHandle(Handle):
    """Translate both endpoints equally."""

    cursor = CURSOR_MOVE

    def drag(self, session, dx, dy, pointer, shift):
        p1, p2 = session.start_points
        moved = [Vec2(p1.x + dx, p1.y + dy), Vec2(p2.x + dx, p2.y + dy)]
        return DragUpdate({'points': clamp_points(moved)})


class LineRotateHandle(Handle):
    """Rotate both endpoints about their midpoint; Shift snaps the segment angle."""

    cursor = CURSOR_GRABBING

    def drag(self, session, dx, dy, pointer, shift):
        center = session.center
        delta = angle_between(pointer, center) - session.start_cursor_angle
        p1, p2 = (rotate_point(p, center, delta) for p in session.start_points)

        deg = segment_degrees(p1, p2)
        if shift:
            desired = snap_rotation(deg, LINE_ROTATION_SPECIALS)
            correction = math.radians(desired - deg)
            p1 = rotate_point(p1, center, correction)
            p2 = rotate_point(p2, center, correction)
            deg = desired

        return DragUpdate({'points': clamp_points([p1, p2])}, hud_deg=deg)
