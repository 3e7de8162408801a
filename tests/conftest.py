"""
Shared fixtures for Drone Report Editor tests.

Provides a sample template and draft, in-memory collaborators, a fake
millisecond clock and ready-to-edit store fixtures.
"""
import sys
import os
import copy
import pytest

# Run Qt headless when no display is available
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Sample template / draft ─────────────────────────────────────────────

SAMPLE_TEMPLATE = {
    'id': 'tpl-solar',
    'name': 'Solar inspection',
    'version': '1',
    'pages': [
        {
            'id': 'cover',
            'name': 'Cover',
            'blocks': [
                {'id': 'title', 'type': 'text', 'rect': {'x': 10, 'y': 10, 'w': 80, 'h': 10},
                 'help': 'Enter the report title'},
                {'id': 'hero', 'type': 'image_slot', 'rect': {'x': 10, 'y': 30, 'w': 80, 'h': 40},
                 'help': 'Drop the hero photo'},
            ],
        },
        {
            'id': 'summary',
            'name': 'Summary',
            'blocks': [
                {'id': 'notes', 'type': 'text', 'rect': {'x': 10, 'y': 10, 'w': 80, 'h': 30},
                 'help': '  Summarise the findings  '},
                {'id': 'grid', 'type': 'table', 'rect': {'x': 10, 'y': 50, 'w': 80, 'h': 30}},
                {'id': 'status', 'type': 'badge', 'rect': {'x': 70, 'y': 5, 'w': 20, 'h': 5}, 'help': '   '},
                {'id': 'sev', 'type': 'section', 'rect': {'x': 10, 'y': 85, 'w': 80, 'h': 10},
                 'options': {'kind': 'severityOverview'}},
            ],
        },
        {
            'id': 'appendix',
            'name': 'Appendix',
            'blocks': [
                {'id': 'left', 'type': 'image_slot', 'rect': {'x': 0, 'y': 0, 'w': 50, 'h': 50}},
                {'id': 'right', 'type': 'image_slot', 'rect': {'x': 50, 'y': 0, 'w': 50, 'h': 50}},
            ],
        },
    ],
}

PLAIN_TEMPLATE = {
    'id': 'tpl-plain',
    'name': 'Plain',
    'pages': [
        {'id': 'blank', 'blocks': [{'id': 'body', 'type': 'text', 'rect': {'x': 0, 'y': 0, 'w': 100, 'h': 100}}]},
    ],
}

SAMPLE_DRAFT = {
    'id': 'draft-1',
    'title': 'Roof survey',
    'templateId': 'tpl-solar',
    'status': 'draft',
    'media': [{'id': 'm1', 'url': 'https://cdn.example/m1.jpg', 'filename': 'm1.jpg', 'kind': 'image'}],
    'payload': {
        'meta': {'templateId': 'tpl-solar', 'title': 'Roof survey'},
        'theme': {'accent': '#0ea5e9'},
        'findings': [],
    },
    'pageInstances': [
        {'id': 'p-cover', 'templatePageId': 'cover', 'values': {'title': '', 'hero': ''}, 'userBlocks': []},
        {'id': 'p-summary', 'templatePageId': 'summary', 'values': {}, 'userBlocks': []},
        {'id': 'p-appendix', 'templatePageId': 'appendix', 'values': {}, 'userBlocks': []},
    ],
    'updatedAt': '2026-01-05T10:00:00Z',
}


class FakeClock:
    """Millisecond clock advanced by hand"""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FailingDraftStore:
    """Draft store whose writes fail until told otherwise"""

    def __init__(self, inner):
        self.inner = inner
        self.fail = True
        self.calls = 0

    def get_draft(self, draft_id):
        return self.inner.get_draft(draft_id)

    def update_draft(self, draft_id, body):
        self.calls += 1
        if self.fail:
            from services.draft_store import DraftStoreError
            raise DraftStoreError("backend unavailable")
        self.inner.update_draft(draft_id, body)


@pytest.fixture
def template_data():
    return copy.deepcopy(SAMPLE_TEMPLATE)


@pytest.fixture
def draft_data():
    return copy.deepcopy(SAMPLE_DRAFT)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def draft_store(draft_data):
    from services.draft_store import InMemoryDraftStore
    return InMemoryDraftStore([draft_data])


@pytest.fixture
def template_loader(template_data):
    from services.template_loader import InMemoryTemplateLoader
    return InMemoryTemplateLoader([template_data, copy.deepcopy(PLAIN_TEMPLATE)])


@pytest.fixture
def config():
    """Short debounce so autosave tests stay fast"""
    from store.config_mixin import EditorConfig
    return EditorConfig(save_debounce_ms=50)


@pytest.fixture
def store(qtbot, draft_store, template_loader, config, clock):
    """Store with the sample draft loaded"""
    from store.editor_store import EditorStore
    s = EditorStore(draft_store, template_loader, config=config, clock=clock)
    s.load_draft('draft-1')
    yield s
    s.shutdown()


@pytest.fixture
def engine(store):
    from components.manipulation.manipulation_engine import ManipulationEngine
    return ManipulationEngine(store)


@pytest.fixture
def surface():
    """1000x500 px page surface offset from the window origin"""
    from models.transform import SurfaceRect
    return SurfaceRect(left=100.0, top=50.0, width=1000.0, height=500.0)


@pytest.fixture
def place(store):
    """Arm a tool and place one block on the active page, returning its id"""
    from models.transform import Rect

    def _place(kind, x, y, w=0.0, h=0.0):
        store.start_insert(kind)
        return store.place_user_block(Rect(x, y, w, h))
    return _place


@pytest.fixture
def failing_backend(draft_store):
    return FailingDraftStore(draft_store)


@pytest.fixture
def failing_store(qtbot, failing_backend, template_loader, config, clock):
    """Store whose saves fail until failing_backend.fail is cleared"""
    from store.editor_store import EditorStore
    s = EditorStore(failing_backend, template_loader, config=config, clock=clock)
    s.load_draft('draft-1')
    yield s
    s.shutdown()
