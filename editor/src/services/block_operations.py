"""
Drone Report Editor - Block Operations Service

This module handles user block creation, update and deletion on a page.
These functions are pure: they take a PageInstance and return a new one,
leaving history, selection and autosave to the editor store.
"""

import copy
import uuid as uuid_module

from models.block import (
    InsertKind, TextBlock, RectBlock, EllipseBlock, DividerBlock, ImageBlock,
    SectionBlock, LineBlock, BlockStyle, StrokeStyle, SectionMeta,
    apply_block_patch, move_block, line_center_points
)
from models.transform import Rect
from utils.geometry import clamp_rect, clamp_percent
from constants import (
    DEFAULT_TEXT_STYLE, DEFAULT_SHAPE_FILL, DEFAULT_SHAPE_STROKE_WIDTH,
    DEFAULT_LINE_STROKE_WIDTH, DEFAULT_DIVIDER_STROKE_WIDTH, LINE_HALF_LENGTH,
    IMAGE_BLOCK_W, IMAGE_BLOCK_H, SECTION_DEFAULT_PROPS, DEFAULT_ROTATION
)


def new_block_id() -> str:
    return str(uuid_module.uuid4())


def _shape_style():
    return BlockStyle(fill=dict(DEFAULT_SHAPE_FILL), stroke=StrokeStyle(width=DEFAULT_SHAPE_STROKE_WIDTH))


def create_block(kind, origin: Rect, block_id: str, z: int):
    """Create a new user block of an insertable kind.

    Args:
        kind: InsertKind (or its string value)
        origin: Rect for shape/text kinds. For lines only the center matters:
            a zero-size rect is the click point itself, otherwise its center
        block_id: Id for the new block
        z: Render order of the new block

    Returns:
        New UserBlock
    """
    kind = InsertKind(kind)
    if kind is InsertKind.LINE:
        if origin.w == 0 and origin.h == 0:
            cx, cy = origin.x, origin.y
        else:
            cx, cy = origin.x + origin.w / 2.0, origin.y + origin.h / 2.0
        return LineBlock(
            id=block_id, z=z,
            block_style=BlockStyle(stroke=StrokeStyle(width=DEFAULT_LINE_STROKE_WIDTH)),
            points=line_center_points(cx, cy, LINE_HALF_LENGTH),
        )

    rect = clamp_rect(origin)
    if kind is InsertKind.TEXT:
        return TextBlock(id=block_id, z=z, rect=rect, value='', style=dict(DEFAULT_TEXT_STYLE))
    if kind is InsertKind.RECT:
        return RectBlock(id=block_id, z=z, rect=rect, rotation=DEFAULT_ROTATION, block_style=_shape_style())
    if kind is InsertKind.ELLIPSE:
        return EllipseBlock(id=block_id, z=z, rect=rect, rotation=DEFAULT_ROTATION, block_style=_shape_style())
    if kind is InsertKind.DIVIDER:
        return DividerBlock(id=block_id, z=z, rect=rect,
                            block_style=BlockStyle(stroke=StrokeStyle(width=DEFAULT_DIVIDER_STROKE_WIDTH)))
    raise ValueError(f"Unsupported insert kind: {kind}")


def create_section_block(section_kind: str, origin: Rect, block_id: str, z: int, payload=None):
    """Create a rect-hosted section block with the kind's default props."""
    props = copy.deepcopy(SECTION_DEFAULT_PROPS.get(section_kind, {}))
    style = BlockStyle(
        fill=dict(DEFAULT_SHAPE_FILL),
        stroke=StrokeStyle(width=0),
        meta=SectionMeta(block_kind=section_kind, props=props, payload=payload),
    )
    return SectionBlock(id=block_id, z=z, rect=clamp_rect(origin), block_style=style)


def create_image_block(x: float, y: float, src: str, block_id: str, z: int):
    """Create a default-size image block at a point, pulled back to fit."""
    rect = Rect(
        clamp_percent(min(x, 100.0 - IMAGE_BLOCK_W)),
        clamp_percent(min(y, 100.0 - IMAGE_BLOCK_H)),
        IMAGE_BLOCK_W, IMAGE_BLOCK_H,
    )
    return ImageBlock(id=block_id, z=z, rect=clamp_rect(rect), src=src)


def append_block(page, block):
    """Append a block at the front of the stack (z = current count)."""
    return page.with_blocks(page.user_blocks + (block,))


def update_block(page, block_id: str, patch: dict):
    """Apply a field-wise patch to one block.

    Returns:
        New PageInstance, or None if the block is not on the page
    """
    index = page.index_of(block_id)
    if index < 0:
        return None
    blocks = list(page.user_blocks)
    blocks[index] = apply_block_patch(blocks[index], patch)
    return page.with_blocks(blocks)


def delete_block(page, block_id: str):
    """Remove one block.

    Returns:
        New PageInstance, or None if the block is not on the page
    """
    if page.index_of(block_id) < 0:
        return None
    return page.with_blocks(b for b in page.user_blocks if b.id != block_id)


def nudge_block(page, block_id: str, dx: float, dy: float):
    """Translate one block by a percent delta.

    Returns:
        New PageInstance, or None if the block is not on the page
    """
    index = page.index_of(block_id)
    if index < 0:
        return None
    blocks = list(page.user_blocks)
    blocks[index] = move_block(blocks[index], dx, dy)
    return page.with_blocks(blocks)


def merge_section_props(page, block_id: str, props_patch: dict):
    """Merge into a section block's meta.props.

    Returns:
        New PageInstance, or None if the block is missing or not a section
    """
    block = page.find_block(block_id)
    if not isinstance(block, SectionBlock):
        return None
    meta = block.meta
    props = dict(meta.props)
    props.update(props_patch or {})
    patch = {'blockStyle': {'meta': SectionMeta(meta.block_kind, props, meta.payload).to_dict()}}
    return update_block(page, block_id, patch)
