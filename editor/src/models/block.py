"""
Drone Report Editor - User Block Data Model

User blocks are the free-form elements a user places on a page. They are a
closed sum type, one frozen dataclass per variant:

    TextBlock     rect + value + text style
    RectBlock     rect + rotation
    EllipseBlock  rect + rotation
    DividerBlock  rect (height acts as thickness)
    ImageBlock    rect + src
    SectionBlock  rect + rotation + typed SectionMeta (data-bound section)
    LineBlock     exactly two endpoints

Blocks are immutable. Every edit produces a new block through
apply_block_patch(), which performs the field-wise merge and re-clamps the
geometry, so a block that exists always satisfies the page invariants.

Wire format (camelCase dicts) matches what the draft store persists. A
SectionBlock is stored as a 'rect' carrying blockStyle.meta.blockKind.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from models.transform import Vec2, Rect
from utils.geometry import clamp_rect, clamp_points, clamp_percent, finite_or
from constants import MIN_W, MIN_H, DEFAULT_ROTATION, DEFAULT_TEXT_STYLE

_logger = logging.getLogger('Block')


class BlockKind(str, Enum):
    TEXT = 'text'
    LINE = 'line'
    RECT = 'rect'
    ELLIPSE = 'ellipse'
    DIVIDER = 'divider'
    IMAGE = 'image'
    SECTION = 'section'


class InsertKind(str, Enum):
    """Kinds the insert tool can place with a canvas click."""
    TEXT = 'text'
    LINE = 'line'
    RECT = 'rect'
    ELLIPSE = 'ellipse'
    DIVIDER = 'divider'


# ======================================================================
# Styles
# ======================================================================

@dataclass(frozen=True)
class StrokeStyle:
    color: Optional[Dict[str, Any]] = None  # {'hex': ...} or {'token': ...}
    width: Optional[float] = None
    dash: Optional[Tuple[float, ...]] = None

    def to_dict(self):
        out = {}
        if self.color is not None:
            out['color'] = dict(self.color)
        if self.width is not None:
            out['width'] = self.width
        if self.dash is not None:
            out['dash'] = list(self.dash)
        return out

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        dash = data.get('dash')
        return cls(
            color=dict(data['color']) if isinstance(data.get('color'), dict) else None,
            width=data.get('width'),
            dash=tuple(dash) if isinstance(dash, (list, tuple)) else None,
        )


@dataclass(frozen=True)
class SectionMeta:
    """Typed metadata of a data-bound section block."""
    block_kind: str
    props: Dict[str, Any] = field(default_factory=dict)
    payload: Any = None

    def to_dict(self):
        out = {'blockKind': self.block_kind, 'props': dict(self.props)}
        if self.payload is not None:
            out['payload'] = self.payload
        return out

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or not data.get('blockKind'):
            return None
        props = data.get('props')
        return cls(
            block_kind=str(data['blockKind']),
            props=dict(props) if isinstance(props, dict) else {},
            payload=data.get('payload'),
        )


@dataclass(frozen=True)
class BlockStyle:
    fill: Optional[Dict[str, Any]] = None
    stroke: Optional[StrokeStyle] = None
    radius: Optional[float] = None
    opacity: Optional[float] = None
    meta: Optional[SectionMeta] = None

    def to_dict(self):
        out = {}
        if self.fill is not None:
            out['fill'] = dict(self.fill)
        if self.stroke is not None:
            out['stroke'] = self.stroke.to_dict()
        if self.radius is not None:
            out['radius'] = self.radius
        if self.opacity is not None:
            out['opacity'] = self.opacity
        if self.meta is not None:
            out['meta'] = self.meta.to_dict()
        return out

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            return None
        return cls(
            fill=dict(data['fill']) if isinstance(data.get('fill'), dict) else None,
            stroke=StrokeStyle.from_dict(data['stroke']) if isinstance(data.get('stroke'), dict) else None,
            radius=data.get('radius'),
            opacity=data.get('opacity'),
            meta=SectionMeta.from_dict(data.get('meta')),
        )


# ======================================================================
# Block variants
# ======================================================================

_DEFAULT_RECT = Rect(0.0, 0.0, MIN_W, MIN_H)
_DEFAULT_POINTS = (Vec2(0.0, 0.0), Vec2(0.0, 0.0))


@dataclass(frozen=True)
class UserBlock:
    """Common fields of every user block."""
    id: str
    z: int = 0
    block_style: Optional[BlockStyle] = None

    kind = None  # overridden per variant

    def _base_dict(self):
        out = {'id': self.id, 'type': self.kind.value, 'z': self.z}
        if self.block_style is not None:
            out['blockStyle'] = self.block_style.to_dict()
        return out

    def to_dict(self):
        return self._base_dict()


@dataclass(frozen=True)
class TextBlock(UserBlock):
    kind = BlockKind.TEXT
    rect: Rect = _DEFAULT_RECT
    value: str = ''
    style: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_TEXT_STYLE))

    def to_dict(self):
        out = self._base_dict()
        out.update(rect=self.rect.to_dict(), value=self.value, style=dict(self.style))
        return out


@dataclass(frozen=True)
class RectBlock(UserBlock):
    kind = BlockKind.RECT
    rect: Rect = _DEFAULT_RECT
    rotation: float = DEFAULT_ROTATION

    def to_dict(self):
        out = self._base_dict()
        out.update(rect=self.rect.to_dict(), rotation=self.rotation)
        return out


@dataclass(frozen=True)
class EllipseBlock(UserBlock):
    kind = BlockKind.ELLIPSE
    rect: Rect = _DEFAULT_RECT
    rotation: float = DEFAULT_ROTATION

    def to_dict(self):
        out = self._base_dict()
        out.update(rect=self.rect.to_dict(), rotation=self.rotation)
        return out


@dataclass(frozen=True)
class DividerBlock(UserBlock):
    kind = BlockKind.DIVIDER
    rect: Rect = _DEFAULT_RECT

    def to_dict(self):
        out = self._base_dict()
        out.update(rect=self.rect.to_dict())
        return out


@dataclass(frozen=True)
class ImageBlock(UserBlock):
    kind = BlockKind.IMAGE
    rect: Rect = _DEFAULT_RECT
    src: str = ''
    alt: str = ''

    def to_dict(self):
        out = self._base_dict()
        out.update(rect=self.rect.to_dict(), src=self.src)
        if self.alt:
            out['alt'] = self.alt
        return out


@dataclass(frozen=True)
class SectionBlock(UserBlock):
    """Rect-hosted, data-bound section (findings table, severity overview, ...)."""
    kind = BlockKind.SECTION
    rect: Rect = _DEFAULT_RECT
    rotation: float = DEFAULT_ROTATION

    @property
    def meta(self) -> SectionMeta:
        return self.block_style.meta

    def to_dict(self):
        out = self._base_dict()
        # Sections persist as rects carrying blockStyle.meta
        out['type'] = BlockKind.RECT.value
        out.update(rect=self.rect.to_dict(), rotation=self.rotation)
        return out


@dataclass(frozen=True)
class LineBlock(UserBlock):
    kind = BlockKind.LINE
    points: Tuple[Vec2, Vec2] = _DEFAULT_POINTS

    @property
    def p1(self) -> Vec2:
        return self.points[0]

    @property
    def p2(self) -> Vec2:
        return self.points[1]

    def to_dict(self):
        out = self._base_dict()
        out['points'] = [p.to_dict() for p in self.points]
        return out


# Variants using rect geometry / supporting rotation
RECT_VARIANTS = (TextBlock, RectBlock, EllipseBlock, DividerBlock, ImageBlock, SectionBlock)
ROTATABLE_VARIANTS = (RectBlock, EllipseBlock, SectionBlock)


def has_rect(block) -> bool:
    return isinstance(block, RECT_VARIANTS)


# ======================================================================
# Parsing / merging
# ======================================================================

def _parse_points(raw, fallback=_DEFAULT_POINTS):
    """Parse a two-point list, filling missing entries/keys from fallback."""
    raw = raw if isinstance(raw, (list, tuple)) else []
    pts = []
    for i in range(2):
        base = fallback[i]
        entry = raw[i] if i < len(raw) and isinstance(raw[i], dict) else {}
        pts.append(Vec2(finite_or(entry.get('x', base.x), base.x), finite_or(entry.get('y', base.y), base.y)))
    return clamp_points(pts)


def _parse_z(raw, fallback):
    z = finite_or(raw, None)
    return int(z) if z is not None and z not in (float('inf'), float('-inf')) else fallback


def block_from_dict(data: Dict[str, Any], fallback_z: int = 0) -> Optional[UserBlock]:
    """Build a typed block from its wire dict.

    Geometry is clamped on the way in. Unknown types return None.
    """
    if not isinstance(data, dict) or not data.get('id'):
        return None

    block_id = str(data['id'])
    block_type = data.get('type')
    z = _parse_z(data.get('z'), fallback_z)
    block_style = BlockStyle.from_dict(data.get('blockStyle'))
    rect = clamp_rect(Rect.from_dict(data.get('rect'), _DEFAULT_RECT)) if isinstance(data.get('rect'), dict) else clamp_rect(_DEFAULT_RECT)
    rotation = finite_or(data.get('rotation', DEFAULT_ROTATION), DEFAULT_ROTATION)

    if block_type == BlockKind.TEXT.value:
        style = dict(DEFAULT_TEXT_STYLE)
        if isinstance(data.get('style'), dict):
            style.update(data['style'])
        return TextBlock(id=block_id, z=z, block_style=block_style, rect=rect,
                         value=str(data.get('value') or ''), style=style)
    if block_type == BlockKind.RECT.value:
        if block_style is not None and block_style.meta is not None:
            return SectionBlock(id=block_id, z=z, block_style=block_style, rect=rect, rotation=rotation)
        return RectBlock(id=block_id, z=z, block_style=block_style, rect=rect, rotation=rotation)
    if block_type == BlockKind.ELLIPSE.value:
        return EllipseBlock(id=block_id, z=z, block_style=block_style, rect=rect, rotation=rotation)
    if block_type == BlockKind.DIVIDER.value:
        return DividerBlock(id=block_id, z=z, block_style=block_style, rect=rect)
    if block_type == BlockKind.IMAGE.value:
        return ImageBlock(id=block_id, z=z, block_style=block_style, rect=rect,
                          src=str(data.get('src') or ''), alt=str(data.get('alt') or ''))
    if block_type == BlockKind.LINE.value:
        return LineBlock(id=block_id, z=z, block_style=block_style, points=_parse_points(data.get('points')))

    _logger.warning(f"Dropping block {block_id} with unknown type {block_type!r}")
    return None


def _merge_block_style(current: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """Merge a blockStyle patch, with stroke merged one level deep."""
    merged = dict(current)
    merged.update(patch)
    if 'stroke' in patch or 'stroke' in current:
        stroke = dict(current.get('stroke') or {})
        stroke.update(patch.get('stroke') or {})
        merged['stroke'] = stroke
    return merged


def apply_block_patch(block: UserBlock, patch: Dict[str, Any]) -> UserBlock:
    """Apply a field-wise patch to a block.

    - rect is merged into the current rect and re-clamped (rect variants only)
    - points are merged index-wise into the current points and re-clamped
      (line only)
    - blockStyle is merged, stroke one level deep
    - style (text) is shallow-merged
    - id and type never change through a patch, except that attaching
      blockStyle.meta to a rect turns it into a section

    Returns:
        New block (the original is untouched)
    """
    if not patch:
        return block

    current = block.to_dict()
    merged = dict(current)
    for key, value in patch.items():
        if key in ('id', 'type'):
            continue
        if key == 'rect':
            if has_rect(block) and isinstance(value, dict):
                merged['rect'] = clamp_rect(Rect.from_dict(value, block.rect)).to_dict()
        elif key == 'points':
            if isinstance(block, LineBlock):
                merged['points'] = [p.to_dict() for p in _parse_points(value, block.points)]
        elif key == 'blockStyle':
            if isinstance(value, dict):
                merged['blockStyle'] = _merge_block_style(current.get('blockStyle') or {}, value)
        elif key == 'style':
            if isinstance(block, TextBlock) and isinstance(value, dict):
                style = dict(current.get('style') or {})
                style.update(value)
                merged['style'] = style
        elif key == 'z':
            merged['z'] = _parse_z(value, block.z)
        else:
            merged[key] = value

    updated = block_from_dict(merged, fallback_z=block.z)
    return updated if updated is not None else block


def with_z(block: UserBlock, z: int) -> UserBlock:
    return block if block.z == z else replace(block, z=z)


def move_block(block: UserBlock, dx: float, dy: float) -> UserBlock:
    """Translate a block by a percent delta, clamped to the page."""
    if isinstance(block, LineBlock):
        moved = clamp_points([Vec2(p.x + dx, p.y + dy) for p in block.points])
        return replace(block, points=moved)
    if has_rect(block):
        r = block.rect
        return replace(block, rect=clamp_rect(Rect(r.x + dx, r.y + dy, r.w, r.h)))
    return block


def line_center_points(cx, cy, half_length):
    """Horizontal segment around a center point, endpoints clamped."""
    cx = clamp_percent(cx)
    cy = clamp_percent(cy)
    return clamp_points([Vec2(cx - half_length, cy), Vec2(cx + half_length, cy)])
