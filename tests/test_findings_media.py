"""
Tests for findings and media binding.

Covers:
- Creating, updating and deleting findings
- Annotation reindexing per photo
- Findings written into payload.findings on save
- Media drops into image slots and user image blocks
- Section block insertion and props
"""
import pytest

from models.block import ImageBlock, SectionBlock
from models.transform import Vec2
from models.finding import reindex_annotations


# ══════════════════════════════════════════════════════════════════════════
# Findings
# ══════════════════════════════════════════════════════════════════════════

class TestFindings:

    def test_create_from_photos(self, store):
        ids = store.create_findings_from_photos(['ph1', 'ph2'])
        assert len(ids) == 2
        assert [f['id'] for f in store.findings] == ids
        first = store.findings[0]
        assert first['photoId'] == 'ph1'
        assert first['severity'] == 3
        assert first['annotations'] == []
        assert store.dirty

    def test_create_with_no_photos(self, store):
        assert store.create_findings_from_photos([]) == []
        assert not store.can_undo

    def test_update_merges_and_stamps(self, store):
        (finding_id,) = store.create_findings_from_photos(['ph1'])
        created_at = store.findings[0]['createdAt']
        store.update_finding(finding_id, {'title': 'Cracked cell', 'severity': 5})
        finding = store.findings[0]
        assert finding['title'] == 'Cracked cell'
        assert finding['severity'] == 5
        assert finding['photoId'] == 'ph1'
        assert finding['createdAt'] == created_at
        assert finding['updatedAt'] >= created_at

    def test_update_unknown_is_noop(self, store):
        store.create_findings_from_photos(['ph1'])
        before = store.findings
        store.update_finding('nope', {'title': 'x'})
        assert store.findings is before

    def test_delete(self, store):
        a, b = store.create_findings_from_photos(['ph1', 'ph2'])
        store.delete_finding(a)
        assert [f['id'] for f in store.findings] == [b]

    def test_set_findings_replaces(self, store):
        store.set_findings([{'id': 'x'}])
        assert store.findings == [{'id': 'x'}]

    def test_findings_saved_in_payload(self, store, draft_store):
        store.create_findings_from_photos(['ph1'])
        store.save_now()
        record = draft_store.get_draft('draft-1')
        assert [f['photoId'] for f in record['payload']['findings']] == ['ph1']
        assert record['payload']['meta']['templateId'] == 'tpl-solar'


class TestReindexAnnotations:

    FINDINGS = [
        {'id': 'f1', 'photoId': 'ph1', 'annotations': [{'id': 'a', 'index': 5}, {'id': 'b', 'index': 2}]},
        {'id': 'f2', 'photoId': 'ph2', 'annotations': [{'id': 'c', 'index': 7}]},
        {'id': 'f3', 'photoId': 'ph1', 'annotations': [{'id': 'd', 'index': 1}]},
    ]

    def test_dense_numbering_across_findings(self):
        result = reindex_annotations(self.FINDINGS, 'ph1')
        assert [(a['id'], a['index']) for a in result[0]['annotations']] == [('b', 1), ('a', 2)]
        assert [(a['id'], a['index']) for a in result[2]['annotations']] == [('d', 3)]

    def test_other_photos_untouched(self):
        result = reindex_annotations(self.FINDINGS, 'ph1')
        assert result[1] is self.FINDINGS[1]

    def test_input_not_mutated(self):
        reindex_annotations(self.FINDINGS, 'ph1')
        assert self.FINDINGS[0]['annotations'][0]['index'] == 5

    def test_through_store_is_undoable(self, store):
        store.set_findings(self.FINDINGS)
        store.reindex_annotations('ph1')
        assert store.findings[2]['annotations'][0]['index'] == 3
        store.undo()
        assert store.findings[2]['annotations'][0]['index'] == 1


# ══════════════════════════════════════════════════════════════════════════
# Media
# ══════════════════════════════════════════════════════════════════════════

class TestInsertImageAtPoint:

    def test_slot_under_point(self, store):
        assert store.insert_image_at_point('p-cover', Vec2(50, 50), {'url': 'u1'})
        assert store.draft.page_instances[0].values['hero'] == 'u1'
        assert store.selected_block_id == 'hero'

    def test_point_dict_accepted(self, store):
        assert store.insert_image_at_point('p-appendix', {'x': 75, 'y': 25}, {'url': 'u2'})
        assert store.draft.page_instances[2].values['right'] == 'u2'

    def test_falls_back_to_first_slot(self, store):
        store.insert_image_at_point('p-appendix', Vec2(50, 90), {'url': 'u3'})
        assert store.draft.page_instances[2].values == {'left': 'u3'}

    def test_page_without_slots_gets_image_block(self, store):
        store.set_page_index(1)
        assert store.insert_image_at_point('p-summary', Vec2(80, 90), {'url': 'u4'})
        blocks = store.draft.page_instances[1].user_blocks
        assert len(blocks) == 1
        image = blocks[0]
        assert isinstance(image, ImageBlock)
        assert image.src == 'u4'
        assert (image.rect.x, image.rect.y, image.rect.w, image.rect.h) == (70, 78, 30, 22)
        assert store.selected_user_block_id == image.id

    def test_is_undoable(self, store):
        store.insert_image_at_point('p-cover', Vec2(50, 50), {'url': 'u1'})
        store.undo()
        assert store.draft.page_instances[0].values['hero'] == ''

    def test_unknown_page(self, store):
        assert store.insert_image_at_point('nope', Vec2(50, 50), {'url': 'u1'}) is False
        assert not store.can_undo

    def test_without_template(self, store):
        store.template = None
        assert store.insert_image_at_point('p-cover', Vec2(50, 50), {'url': 'u1'}) is False


class TestInsertImageAppend:

    def test_fills_empty_slots_in_order(self, store):
        store.insert_image_append('p-appendix', {'url': 'u1'})
        store.insert_image_append('p-appendix', {'url': 'u2'})
        assert store.draft.page_instances[2].values == {'left': 'u1', 'right': 'u2'}

    def test_all_full_overwrites_first(self, store):
        for url in ('u1', 'u2', 'u3'):
            store.insert_image_append('p-appendix', {'url': url})
        assert store.draft.page_instances[2].values == {'left': 'u3', 'right': 'u2'}

    def test_no_slot_adds_block_at_default_position(self, store):
        store.insert_image_append('p-summary', {'url': 'u1'})
        image = store.draft.page_instances[1].user_blocks[0]
        assert (image.rect.x, image.rect.y) == (10, 10)

    def test_append_does_not_advance_guide(self, store):
        store.enable_guide()
        store.set_guide_step(1)
        store.insert_image_append('p-cover', {'url': 'u1'})
        assert store.guide.step_index == 1


# ══════════════════════════════════════════════════════════════════════════
# Section blocks
# ══════════════════════════════════════════════════════════════════════════

class TestSections:

    def test_insert_default_rect(self, store):
        block_id = store.insert_section('findingsTable')
        block = store.current_page().find_block(block_id)
        assert isinstance(block, SectionBlock)
        assert (block.rect.x, block.rect.y, block.rect.w, block.rect.h) == (10, 10, 80, 24)
        assert block.meta.props['pageSize'] == 6
        assert store.selected_user_block_id == block_id

    def test_photo_strip_is_shorter(self, store):
        block_id = store.insert_section('photoStrip')
        assert store.current_page().find_block(block_id).rect.h == 18

    def test_update_props_merges(self, store):
        block_id = store.insert_section('orthoPair')
        store.update_block_props(block_id, {'showNorth': False})
        props = store.current_page().find_block(block_id).meta.props
        assert props['showNorth'] is False
        assert props['leftLabel'] == 'Ortho'

    def test_update_props_ignores_plain_rect(self, store, place):
        block_id = place('rect', 10, 10, 20, 20)
        before = store.draft
        store.update_block_props(block_id, {'x': 1})
        assert store.draft is before

    def test_section_payload_kept(self, store):
        block_id = store.insert_section('thermalAnomalies', payload={'rows': 2})
        assert store.current_page().find_block(block_id).meta.payload == {'rows': 2}


# ══════════════════════════════════════════════════════════════════════════
# Style setters
# ══════════════════════════════════════════════════════════════════════════

class TestStyleSetters:

    @pytest.fixture
    def rect_id(self, place):
        return place('rect', 10, 10, 20, 20)

    def test_fill_and_stroke(self, store, rect_id):
        store.set_block_fill(rect_id, {'hex': '#ff0000'})
        store.set_block_stroke(rect_id, {'dash': [2, 2]})
        style = store.current_page().find_block(rect_id).block_style
        assert style.fill == {'hex': '#ff0000'}
        assert style.stroke.width == 1
        assert style.stroke.dash == (2, 2)

    def test_radius_and_opacity(self, store, rect_id):
        store.set_block_radius(rect_id, 4)
        store.set_block_opacity(rect_id, 0.5)
        style = store.current_page().find_block(rect_id).block_style
        assert style.radius == 4
        assert style.opacity == 0.5

    def test_text_style(self, store, place):
        block_id = place('text', 10, 10, 40, 8)
        store.set_text_style(block_id, {'bold': True, 'align': 'center'})
        style = store.current_page().find_block(block_id).style
        assert style['bold'] is True
        assert style['align'] == 'center'

    def test_unknown_block_is_noop(self, store, rect_id):
        entries = len(store.history.past)
        store.set_block_fill('nope', {'hex': '#000'})
        assert len(store.history.past) == entries
