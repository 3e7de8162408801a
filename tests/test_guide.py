"""
Tests for the guided-step wizard.

The sample template yields three steps: cover/title, cover/hero and
summary/notes (the blank-help badge is not a step).

Covers:
- Enabling / disabling and page focus
- Advancing when the current step's block receives a value
- Manual navigation with clamping
- Steps re-derived on template switch
"""
import pytest

from models.transform import Vec2


class TestGuideSteps:

    def test_steps_derived_on_load(self, store):
        assert [s.block_id for s in store.steps] == ['title', 'hero', 'notes']
        assert not store.guide.enabled

    def test_current_step(self, store):
        assert store.current_step.block_id == 'title'

    def test_enable_focuses_step_page(self, store):
        store.set_page_index(2)
        store.enable_guide()
        assert store.guide.enabled
        assert store.guide.step_index == 0
        assert store.page_index == 0

    def test_enable_emits_guide_changed(self, store, qtbot):
        with qtbot.waitSignal(store.guideChanged, timeout=1000) as blocker:
            store.enable_guide()
        assert blocker.args == [True, 0]

    def test_disable_resets_and_clears_block_selection(self, store):
        store.enable_guide()
        store.guide_next()
        store.set_selected_block('hero')
        before = store.draft
        store.disable_guide()
        assert not store.guide.enabled
        assert store.guide.step_index == 0
        assert store.selected_block_id is None
        assert store.draft is before


class TestGuideAdvance:

    @pytest.fixture
    def guided(self, store):
        store.enable_guide()
        return store

    def test_value_on_current_step_advances(self, guided):
        guided.set_value('p-cover', 'title', 'Roof A')
        assert guided.guide.step_index == 1
        assert guided.page_index == 0

    def test_advance_switches_page(self, guided):
        guided.set_guide_step(1)
        guided.set_value('p-cover', 'hero', 'u1')
        assert guided.guide.step_index == 2
        assert guided.page_index == 1

    def test_value_on_other_block_does_not_advance(self, guided):
        guided.set_value('p-cover', 'hero', 'u1')
        assert guided.guide.step_index == 0

    def test_last_step_stays(self, guided):
        guided.set_guide_step(2)
        guided.set_value('p-summary', 'notes', 'All fine')
        assert guided.guide.step_index == 2

    def test_disabled_guide_does_not_advance(self, store):
        store.set_value('p-cover', 'title', 'Roof A')
        assert store.guide.step_index == 0

    def test_slot_binding_advances(self, guided):
        guided.set_guide_step(1)
        assert guided.insert_image_at_point('p-cover', Vec2(50, 50), {'url': 'u1'})
        assert guided.guide.step_index == 2
        assert guided.page_index == 1

    def test_set_value_selects_block(self, guided):
        guided.set_value('p-cover', 'title', 'Roof A')
        assert guided.selected_block_id == 'title'


class TestGuideNavigation:

    def test_next_and_prev(self, store):
        store.enable_guide()
        store.guide_next()
        store.guide_next()
        assert store.guide.step_index == 2
        assert store.page_index == 1
        store.guide_prev()
        assert store.guide.step_index == 1
        assert store.page_index == 0

    def test_next_clamps_at_end(self, store):
        store.enable_guide()
        for _ in range(5):
            store.guide_next()
        assert store.guide.step_index == 2

    def test_prev_clamps_at_start(self, store):
        store.enable_guide()
        store.guide_prev()
        assert store.guide.step_index == 0

    def test_skip_moves_forward(self, store):
        store.enable_guide()
        store.guide_skip()
        assert store.guide.step_index == 1

    @pytest.mark.parametrize("index, expected", [(-4, 0), (1, 1), (99, 2)])
    def test_set_step_clamps(self, store, index, expected):
        store.enable_guide()
        store.set_guide_step(index)
        assert store.guide.step_index == expected

    def test_navigation_does_not_edit_document(self, store):
        before = store.draft
        store.enable_guide()
        store.guide_next()
        store.guide_prev()
        assert store.draft is before
        assert not store.can_undo

    def test_navigation_without_steps_is_noop(self, store):
        store.select_template('tpl-plain')
        assert store.steps == []
        store.guide_next()
        store.guide_prev()
        assert store.guide.step_index == 0


class TestGuideTemplateSwitch:

    def test_select_template_restarts_guide(self, store):
        store.enable_guide()
        store.guide_next()
        store.guide_next()
        store.select_template('tpl-solar')
        assert store.guide.enabled
        assert store.guide.step_index == 0
        assert store.selected_block_id == 'title'
        assert store.page_index == 0

    def test_template_without_help_disables_guide(self, store):
        store.enable_guide()
        store.select_template('tpl-plain')
        assert not store.guide.enabled
        assert store.selected_block_id is None
