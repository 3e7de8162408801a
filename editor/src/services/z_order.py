"""
Drone Report Editor - Z-Order Service

Stacking order of user blocks within one page. Blocks are kept in render
order with z == index; these helpers swap a block with its neighbour and
renumber so the two never drift apart.
"""

from models.block import with_z
from models.draft import normalize_z


def _swap(ordered, i, j):
    """Swap two positions, then renumber z from array order."""
    swapped = list(ordered)
    swapped[i], swapped[j] = swapped[j], swapped[i]
    return tuple(with_z(block, k) for k, block in enumerate(swapped))


def _index_of(ordered, block_id):
    return next((i for i, b in enumerate(ordered) if b.id == block_id), -1)


def bring_forward(blocks, block_id):
    """Move a block one step toward the front.

    Returns:
        New normalized block tuple, or None if the block is missing or
        already at the front
    """
    ordered = normalize_z(blocks)
    index = _index_of(ordered, block_id)
    if index < 0 or index == len(ordered) - 1:
        return None
    return _swap(ordered, index, index + 1)


def send_backward(blocks, block_id):
    """Move a block one step toward the back.

    Returns:
        New normalized block tuple, or None if the block is missing or
        already at the back
    """
    ordered = normalize_z(blocks)
    index = _index_of(ordered, block_id)
    if index <= 0:
        return None
    return _swap(ordered, index, index - 1)


def is_dense(blocks) -> bool:
    """True when z values are exactly 0..n-1 in array order."""
    return [b.z for b in blocks] == list(range(len(blocks)))
