"""Draft loading, saving and title commits for the editor store"""

from dataclasses import replace

from models.draft import Draft
from models.template import compute_steps
from models.tool import ToolState, GuideState, Selection
from services.persistence import serialize_draft


class IOMixin:
	"""Load/save plumbing between the store and its collaborators"""

	def load_draft(self, draft_id):
		"""Fetch a draft and reset all editing state around it

		Raises:
			DraftStoreError: If the store cannot produce the draft
		"""
		record = self.draft_store.get_draft(draft_id)
		draft = Draft.from_dict(record)
		template_id = draft.resolved_template_id
		template = self.template_loader.load_template(template_id) if template_id else None

		self.draft = draft
		self.template = template
		self.findings = list(draft.findings)
		self.steps = compute_steps(template)
		self.guide = GuideState()
		self.selection = Selection()
		self.tool = ToolState.idle()
		self.history.clear()
		self.persistence.reset(last_saved_at=draft.updated_at)
		self.page_index = int(max(0, min(self.page_index, self._max_page_index())))

		self._logger.info(f"Loaded draft {draft.id} ({len(draft.page_instances)} pages, "
						  f"template {template_id or 'none'}, {len(self.steps)} steps)")
		self.draftChanged.emit()
		self.selectionChanged.emit(None, None)
		self.toolChanged.emit(self.tool)
		self.guideChanged.emit(False, 0)
		self.pageIndexChanged.emit(self.page_index)
		return draft

	@property
	def dirty(self):
		return self.persistence.dirty

	@property
	def saving(self):
		return self.persistence.saving

	@property
	def last_saved_at(self):
		return self.persistence.last_saved_at

	def _build_save_body(self):
		if self.draft is None:
			return None
		return self.draft.id, serialize_draft(self.draft, self.findings)

	def save_debounced(self):
		if self.draft is None:
			return
		self.persistence.save_debounced()

	def save_now(self):
		"""Flush immediately; storage errors propagate with dirty kept"""
		self.persistence.save_now()

	def _save_now_reported(self):
		"""Flush immediately, reporting a failure instead of raising it"""
		try:
			self.persistence.save_now()
		except Exception as e:
			self._logger.warning(f"Immediate save failed, changes kept for retry: {e}")
			self.persistence.saveFailed.emit(str(e))

	def set_draft_title(self, title):
		"""Commit a new title and save it right away

		Blank titles and unchanged titles are ignored.
		"""
		if self.draft is None:
			return
		title = (title or '').strip()
		current = (self.draft.title or str(self.draft.meta.get('title') or '')).strip()
		if not title or title == current:
			return

		self.mark()
		self.draft = replace(self.draft.with_meta(title=title), title=title)
		self.persistence.mark_dirty()
		self.draftChanged.emit()
		self._save_now_reported()
