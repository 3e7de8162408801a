"""Geometry data structures for percent-space and pixel-space values."""
import math
from dataclasses import dataclass


def _number(value, fallback):
    """float(value), or fallback when value is missing, non-numeric or NaN."""
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    return fallback if math.isnan(n) else n


@dataclass(frozen=True)
class Vec2:
    """2D point or vector.

    Used for any x/y coordinate pair across different spaces:
    - Page percent units (0-100)
    - Pointer pixels (client coordinates)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def to_dict(self):
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_dict(cls, data, base=None):
        """Build from {'x', 'y'}; bad or missing fields fall back to base (or 0)."""
        data = data if isinstance(data, dict) else {}
        base = base or cls(0.0, 0.0)
        return cls(_number(data.get('x'), base.x), _number(data.get('y'), base.y))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in page-percent units.

    x/y is the top-left corner, w/h the extent.
    """
    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.w / 2.0, self.y + self.h / 2.0)

    def contains(self, x: float, y: float) -> bool:
        """Inclusive point containment test."""
        return self.x <= x <= self.x + self.w and self.y <= y <= self.y + self.h

    def to_dict(self):
        return {'x': self.x, 'y': self.y, 'w': self.w, 'h': self.h}

    @classmethod
    def from_dict(cls, data, base=None):
        """Build from {'x', 'y', 'w', 'h'}; bad or missing fields fall back to base (or 0)."""
        data = data if isinstance(data, dict) else {}
        base = base or cls(0.0, 0.0, 0.0, 0.0)
        return cls(
            _number(data.get('x'), base.x),
            _number(data.get('y'), base.y),
            _number(data.get('w'), base.w),
            _number(data.get('h'), base.h),
        )


@dataclass(frozen=True)
class SurfaceRect:
    """Live bounding rectangle of the page surface, in client pixels.

    Supplied by the presentation layer on every pointer event so that a
    window resize in the middle of a drag is picked up immediately.
    """
    left: float
    top: float
    width: float
    height: float
