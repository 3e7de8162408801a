"""
Tests for z-order of user blocks within a page.

Covers:
- bring_forward / send_backward swaps with dense renumbering
- Boundary and unknown-id no-ops
- Density preserved through store edits
"""
from models.block import block_from_dict
from services import z_order


def _blocks(*ids):
    return tuple(block_from_dict({'id': block_id, 'type': 'rect', 'z': i,
                                  'rect': {'x': 0, 'y': 0, 'w': 10, 'h': 10}})
                 for i, block_id in enumerate(ids))


# ══════════════════════════════════════════════════════════════════════════
# Pure reordering
# ══════════════════════════════════════════════════════════════════════════

class TestReorder:

    def test_bring_forward_swaps_with_next(self):
        result = z_order.bring_forward(_blocks('a', 'b', 'c'), 'a')
        assert [b.id for b in result] == ['b', 'a', 'c']
        assert z_order.is_dense(result)

    def test_send_backward_swaps_with_previous(self):
        result = z_order.send_backward(_blocks('a', 'b', 'c'), 'c')
        assert [b.id for b in result] == ['a', 'c', 'b']
        assert z_order.is_dense(result)

    def test_frontmost_cannot_move_forward(self):
        assert z_order.bring_forward(_blocks('a', 'b'), 'b') is None

    def test_backmost_cannot_move_backward(self):
        assert z_order.send_backward(_blocks('a', 'b'), 'a') is None

    def test_unknown_id_is_noop(self):
        assert z_order.bring_forward(_blocks('a', 'b'), 'zz') is None
        assert z_order.send_backward(_blocks('a', 'b'), 'zz') is None

    def test_sparse_input_renumbered(self):
        sparse = tuple(block_from_dict({'id': i, 'type': 'rect', 'z': z,
                                        'rect': {'x': 0, 'y': 0, 'w': 10, 'h': 10}})
                       for i, z in (('a', 10), ('b', 2), ('c', 7)))
        result = z_order.bring_forward(sparse, 'b')
        assert [b.id for b in result] == ['c', 'b', 'a']
        assert [b.z for b in result] == [0, 1, 2]


# ══════════════════════════════════════════════════════════════════════════
# Through the store
# ══════════════════════════════════════════════════════════════════════════

class TestStoreZOrder:

    def test_place_appends_on_top(self, store, place):
        ids = [place('rect', 10, 10, 20, 20), place('ellipse', 20, 20, 20, 20), place('text', 30, 30, 40, 8)]
        blocks = store.current_page().user_blocks
        assert [b.id for b in blocks] == ids
        assert z_order.is_dense(blocks)

    def test_bring_forward_and_back(self, store, place):
        a = place('rect', 10, 10, 20, 20)
        b = place('rect', 20, 20, 20, 20)
        assert store.bring_forward(a) is True
        assert [blk.id for blk in store.current_page().user_blocks] == [b, a]
        assert store.send_backward(a) is True
        assert [blk.id for blk in store.current_page().user_blocks] == [a, b]

    def test_boundary_noop_does_not_mark(self, store, place):
        a = place('rect', 10, 10, 20, 20)
        entries = len(store.history.past)
        assert store.bring_forward(a) is False
        assert store.send_backward(a) is False
        assert len(store.history.past) == entries

    def test_delete_keeps_density(self, store, place):
        ids = [place('rect', 10, 10, 20, 20) for _ in range(4)]
        store.delete_user_block(ids[1])
        blocks = store.current_page().user_blocks
        assert [b.id for b in blocks] == [ids[0], ids[2], ids[3]]
        assert z_order.is_dense(blocks)
