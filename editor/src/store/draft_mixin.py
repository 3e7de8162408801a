"""Draft values, page operations, view state and template switching"""

import math
import uuid as uuid_module
from dataclasses import replace

from models.draft import PageInstance
from models.template import compute_steps, default_value_for
from models.tool import ToolState
from utils.geometry import clamp
from constants import ZOOM_MIN, ZOOM_MAX, PREVIEW_ZOOM_MIN, PREVIEW_ZOOM_MAX, DEFAULT_ZOOM


def _clamp_zoom(value, lo, hi):
	try:
		n = float(value)
	except (TypeError, ValueError):
		return DEFAULT_ZOOM
	if not math.isfinite(n):
		return DEFAULT_ZOOM
	return clamp(n, lo, hi)


class DraftMixin:
	"""Page-level edits of the draft"""

	# ========================================
	# Pages
	# ========================================

	def current_page(self):
		"""Active PageInstance, or None"""
		if self.draft is None:
			return None
		return self.draft.page_at(self.page_index)

	def _max_page_index(self):
		if self.draft is None:
			return 0
		return max(0, len(self.draft.page_instances) - 1)

	def _set_page_index(self, index, force=False):
		index = int(clamp(index, 0, self._max_page_index()))
		if force or index != self.page_index:
			self.page_index = index
			self.pageIndexChanged.emit(index)

	def set_page_index(self, index):
		self._set_page_index(index)

	def _commit_draft(self, draft):
		"""Swap in an edited draft and schedule a save"""
		self.draft = draft
		self.draftChanged.emit()
		self.save_debounced()

	def duplicate_page(self, page_id):
		"""Insert an empty page bound to the same template page after the source

		Returns:
			New page id, or None if the page is unknown
		"""
		if self.draft is None:
			return None
		index = self.draft.page_index_of(page_id)
		if index < 0:
			self._logger.warning(f"duplicate_page: unknown page {page_id}")
			return None

		self.mark()
		source = self.draft.page_instances[index]
		clone = PageInstance(id=str(uuid_module.uuid4()), template_page_id=source.template_page_id)
		pages = list(self.draft.page_instances)
		pages.insert(index + 1, clone)
		self.draft = self.draft.with_pages(pages)
		self._set_page_index(index + 1)
		self._commit_draft(self.draft)
		return clone.id

	def repeat_page(self, page_id):
		return self.duplicate_page(page_id)

	def delete_page(self, page_id):
		"""Remove a page; the last remaining page is never deleted

		Returns:
			True if a page was removed
		"""
		if self.draft is None:
			return False
		index = self.draft.page_index_of(page_id)
		if index < 0 or len(self.draft.page_instances) <= 1:
			return False

		self.mark()
		pages = list(self.draft.page_instances)
		del pages[index]
		self.draft = self.draft.with_pages(pages)
		# The index may be unchanged while the page behind it is not
		self._set_page_index(max(0, index - 1), force=True)
		self._commit_draft(self.draft)
		return True

	# ========================================
	# Values
	# ========================================

	def set_value(self, page_id, block_id, value):
		"""Bind a value to a template block on a page and advance the guide"""
		if self.draft is None:
			return
		index = self.draft.page_index_of(page_id)
		if index < 0:
			self._logger.debug(f"set_value: unknown page {page_id}")
			return

		self.mark(coalesce=True)
		page = self.draft.page_instances[index].with_value(block_id, value)
		self.draft = self.draft.with_page(index, page)
		self.set_selected_block(block_id)
		self._advance_guide_if_current(block_id)
		self._commit_draft(self.draft)

	# ========================================
	# View state
	# ========================================

	def set_zoom(self, value):
		self.zoom = _clamp_zoom(value, ZOOM_MIN, ZOOM_MAX)

	def open_preview(self):
		self.preview_open = True
		self.preview_zoom = DEFAULT_ZOOM

	def close_preview(self):
		self.preview_open = False

	def set_preview_zoom(self, value):
		self.preview_zoom = _clamp_zoom(value, PREVIEW_ZOOM_MIN, PREVIEW_ZOOM_MAX)

	# ========================================
	# Template switch
	# ========================================

	def _pages_for_template(self, template):
		return [
			PageInstance(
				id=str(uuid_module.uuid4()),
				template_page_id=page.id,
				values={block.id: default_value_for(block) for block in page.blocks},
			)
			for page in template.pages
		]

	def select_template(self, template_id):
		"""Switch the draft to another template

		Page instances are rebuilt with default values when the current pages
		do not all belong to the new template. The guide is enabled iff the
		template has steps. The result is saved immediately.
		"""
		self.mark()
		template = self.template_loader.load_template(template_id) if template_id else None
		self.template = template
		self.steps = compute_steps(template)

		if self.draft is None:
			return

		draft = self.draft
		meta = dict(draft.meta)
		if template_id:
			meta['templateId'] = template_id
		else:
			meta.pop('templateId', None)
		payload = dict(draft.payload)
		payload['meta'] = meta
		if not isinstance(payload.get('findings'), list):
			payload['findings'] = []
		draft = replace(draft, payload=payload, template_id=template_id or None)

		new_page_ids = {page.id for page in template.pages} if template else set()
		mismatch = (not draft.page_instances
					or any(p.template_page_id not in new_page_ids for p in draft.page_instances))
		if mismatch and template is not None:
			draft = draft.with_pages(self._pages_for_template(template))

		self.draft = draft
		self._set_page_index(0, force=True)
		guide_enabled = bool(self.steps)
		self._set_guide(guide_enabled, 0)
		self._set_selection(self.steps[0].block_id if guide_enabled else None, None)
		self._set_tool(ToolState.idle())
		if guide_enabled:
			self._focus_step_page(0)

		self.draftChanged.emit()
		self._save_now_reported()
