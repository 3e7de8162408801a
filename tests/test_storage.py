"""
Tests for draft stores and template loaders.

Covers:
- InMemoryDraftStore copy isolation and merge-on-update
- JsonFileDraftStore on a temporary directory
- InMemoryTemplateLoader / DirectoryTemplateLoader lookups and fallbacks
- A store editing a draft backed by JSON files
"""
import json
import pytest

from services.draft_store import (
    InMemoryDraftStore, JsonFileDraftStore, DraftStoreError, DraftNotFoundError
)
from services.template_loader import InMemoryTemplateLoader, DirectoryTemplateLoader
from models.template import compute_steps


# ══════════════════════════════════════════════════════════════════════════
# Draft stores
# ══════════════════════════════════════════════════════════════════════════

class TestInMemoryDraftStore:

    def test_missing_draft(self, draft_store):
        with pytest.raises(DraftNotFoundError):
            draft_store.get_draft('nope')
        with pytest.raises(DraftStoreError):
            draft_store.update_draft('nope', {})

    def test_returns_copies(self, draft_store):
        record = draft_store.get_draft('draft-1')
        record['title'] = 'changed'
        assert draft_store.get_draft('draft-1')['title'] == 'Roof survey'

    def test_update_merges_and_stamps(self, draft_store):
        draft_store.update_draft('draft-1', {'title': 'New'})
        record = draft_store.get_draft('draft-1')
        assert record['title'] == 'New'
        assert record['status'] == 'draft'
        assert record['updatedAt'] != '2026-01-05T10:00:00Z'

    def test_update_body_copied(self, draft_store):
        body = {'media': [{'id': 'm2'}]}
        draft_store.update_draft('draft-1', body)
        body['media'].append({'id': 'm3'})
        assert draft_store.get_draft('draft-1')['media'] == [{'id': 'm2'}]


class TestJsonFileDraftStore:

    @pytest.fixture
    def file_store(self, tmp_path, draft_data):
        s = JsonFileDraftStore(tmp_path / 'drafts')
        s.create_draft(draft_data)
        return s

    def test_get(self, file_store):
        assert file_store.get_draft('draft-1')['title'] == 'Roof survey'

    def test_missing(self, file_store):
        with pytest.raises(DraftNotFoundError):
            file_store.get_draft('nope')

    def test_update_persists(self, file_store, tmp_path):
        file_store.update_draft('draft-1', {'title': 'On disk'})
        with open(tmp_path / 'drafts' / 'draft-1.json', encoding='utf-8') as f:
            record = json.load(f)
        assert record['title'] == 'On disk'
        assert record['templateId'] == 'tpl-solar'
        assert not (tmp_path / 'drafts' / 'draft-1.json.tmp').exists()

    def test_corrupt_file(self, file_store, tmp_path):
        (tmp_path / 'drafts' / 'draft-1.json').write_text('{broken', encoding='utf-8')
        with pytest.raises(DraftStoreError) as excinfo:
            file_store.get_draft('draft-1')
        assert not isinstance(excinfo.value, DraftNotFoundError)

    def test_editor_round_trip(self, qtbot, file_store, template_loader, config):
        from store.editor_store import EditorStore
        s = EditorStore(file_store, template_loader, config=config)
        s.load_draft('draft-1')
        s.start_insert('text')
        block_id = s.place_user_block({'x': 10, 'y': 10, 'w': 40, 'h': 8})
        s.save_now()

        reloaded = EditorStore(file_store, template_loader, config=config)
        reloaded.load_draft('draft-1')
        assert reloaded.current_page().find_block(block_id) is not None
        s.shutdown()
        reloaded.shutdown()


# ══════════════════════════════════════════════════════════════════════════
# Template loaders
# ══════════════════════════════════════════════════════════════════════════

class TestInMemoryTemplateLoader:

    def test_lookup(self, template_loader):
        assert template_loader.load_template('tpl-plain').pages[0].id == 'blank'

    def test_unknown(self, template_loader):
        assert template_loader.load_template('nope') is None

    def test_empty_loader(self):
        assert InMemoryTemplateLoader().load_template('tpl-solar') is None


class TestDirectoryTemplateLoader:

    @pytest.fixture
    def directory(self, tmp_path, template_data):
        (tmp_path / 'tpl-solar.json').write_text(json.dumps(template_data), encoding='utf-8')
        (tmp_path / 'tpl-bad.json').write_text('{"id": "tpl-bad", "pages": [', encoding='utf-8')
        return tmp_path

    def test_loads_file(self, directory):
        template = DirectoryTemplateLoader(directory).load_template('tpl-solar')
        assert [p.id for p in template.pages] == ['cover', 'summary', 'appendix']
        assert len(compute_steps(template)) == 3

    def test_cached(self, directory):
        loader = DirectoryTemplateLoader(directory)
        first = loader.load_template('tpl-solar')
        (directory / 'tpl-solar.json').unlink()
        assert loader.load_template('tpl-solar') is first

    def test_unknown_returns_none(self, directory):
        assert DirectoryTemplateLoader(directory).load_template('nope') is None
        assert DirectoryTemplateLoader(directory).load_template('') is None

    def test_malformed_json_has_no_pages(self, directory):
        template = DirectoryTemplateLoader(directory).load_template('tpl-bad')
        assert template.id == 'tpl-bad'
        assert template.pages == ()
        assert compute_steps(template) == []
