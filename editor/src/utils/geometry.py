"""Percent-space geometry helpers.

Conversion between pointer pixels and page-percent coordinates, and the
clamping rules that keep every block on the page:
- Scalars are clamped into [0, 100]
- Rects keep w/h within [MIN, 100] and are pushed back inside the page
- Line endpoints are clamped independently of each other

All helpers are total: out-of-range or garbage input degrades to the
nearest valid value instead of raising.
"""

import math

from models.transform import Vec2, Rect
from constants import (
    PERCENT_MIN, PERCENT_MAX, MIN_W, MIN_H,
    ROTATION_SNAP_STEP, ROTATION_SNAP_TOLERANCE
)


def finite_or(value, fallback=PERCENT_MIN):
    try:
        n = float(value)
    except (TypeError, ValueError):
        return fallback
    if math.isnan(n):
        return fallback
    return n


def clamp(value, lo, hi):
    """Clamp a scalar into [lo, hi], mapping NaN/garbage to lo."""
    return max(lo, min(hi, finite_or(value, lo)))


def clamp_percent(value):
    """Clamp a scalar into [0, 100]."""
    return clamp(value, PERCENT_MIN, PERCENT_MAX)


def clamp_rect(rect: Rect) -> Rect:
    """Fit a rect on the page.

    w/h are clamped to [MIN, 100] first, then x/y are pulled back so the far
    edges stay within 100 (x = min(x, 100 - w)).
    """
    w = clamp(rect.w, MIN_W, PERCENT_MAX)
    h = clamp(rect.h, MIN_H, PERCENT_MAX)
    x = clamp_percent(min(finite_or(rect.x), PERCENT_MAX - w))
    y = clamp_percent(min(finite_or(rect.y), PERCENT_MAX - h))
    return Rect(x, y, w, h)


def clamp_points(points):
    """Clamp each point's x/y into [0, 100] independently.

    Returns:
        Tuple of Vec2
    """
    return tuple(Vec2(clamp_percent(p.x), clamp_percent(p.y)) for p in points)


def normalize_degrees(deg):
    """Wrap an angle into (-180, 180]."""
    d = ((finite_or(deg, 0.0) + 180.0) % 360.0 + 360.0) % 360.0 - 180.0
    return 180.0 if d == -180.0 else d


def round_half_up(value):
    return math.floor(value + 0.5)


def snap_rotation(deg, specials):
    """Snap an angle to the nearest step, then to a special angle if close.

    Args:
        deg: Angle in degrees
        specials: Angles that win when the stepped value is within tolerance

    Returns:
        Snapped angle in degrees
    """
    snapped = round_half_up(deg / ROTATION_SNAP_STEP) * ROTATION_SNAP_STEP
    for special in specials:
        if abs(snapped - special) < ROTATION_SNAP_TOLERANCE:
            return float(special)
    return float(snapped)


def angle_between(point: Vec2, center: Vec2):
    """atan2 angle of point around center, in radians."""
    return math.atan2(point.y - center.y, point.x - center.x)


def rotate_point(point: Vec2, center: Vec2, radians) -> Vec2:
    """Rotate point about center by the given angle."""
    cos_r = math.cos(radians)
    sin_r = math.sin(radians)
    dx = point.x - center.x
    dy = point.y - center.y
    return Vec2(center.x + dx * cos_r - dy * sin_r, center.y + dx * sin_r + dy * cos_r)


def midpoint(p1: Vec2, p2: Vec2) -> Vec2:
    return Vec2((p1.x + p2.x) / 2.0, (p1.y + p2.y) / 2.0)


def segment_degrees(p1: Vec2, p2: Vec2):
    """Direction of the segment p1 -> p2 in degrees, wrapped to (-180, 180]."""
    return normalize_degrees(math.degrees(math.atan2(p2.y - p1.y, p2.x - p1.x)))


def pixel_delta_to_percent(dx_px, dy_px, surface):
    """Convert a pixel delta to percent units of the page surface.

    Returns:
        (dx, dy) in percent, or None when the surface has no area
    """
    if surface is None or surface.width <= 0 or surface.height <= 0:
        return None
    return dx_px / surface.width * 100.0, dy_px / surface.height * 100.0


def client_to_percent(client_x, client_y, surface, clamped=True):
    """Convert a client pixel position to page-percent coordinates.

    Args:
        clamped: Clamp the result into [0, 100]

    Returns:
        Vec2, or None when the surface has no area
    """
    if surface is None or surface.width <= 0 or surface.height <= 0:
        return None
    nx = (client_x - surface.left) / surface.width * 100.0
    ny = (client_y - surface.top) / surface.height * 100.0
    if clamped:
        return Vec2(clamp_percent(nx), clamp_percent(ny))
    return Vec2(nx, ny)
