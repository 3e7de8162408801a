"""Guided-step wizard for the editor store"""

from models.template import compute_steps
from models.tool import GuideState


class GuideMixin:
	"""Linear wizard over the template's help-annotated blocks

	Steps are derived from the template, never stored in the draft. Moving
	between steps switches the active page to the page holding the step's
	block; none of these operations edit the document.
	"""

	def _set_guide(self, enabled, step_index):
		guide = GuideState(enabled, step_index)
		if guide != self.guide:
			self.guide = guide
			self.guideChanged.emit(enabled, step_index)

	def _clamp_step(self, index):
		return max(0, min(int(index), max(0, len(self.steps) - 1)))

	def _focus_step_page(self, index):
		"""Switch to the page of step `index`, if such a page exists"""
		if not (0 <= index < len(self.steps)) or self.draft is None:
			return
		page_index = self.draft.page_index_for_template_page(self.steps[index].page_id)
		if page_index >= 0:
			self._set_page_index(page_index)

	@property
	def current_step(self):
		if not self.steps:
			return None
		return self.steps[self._clamp_step(self.guide.step_index)]

	def recompute_steps(self):
		"""Re-derive steps from the template, keeping progress in range"""
		self.steps = compute_steps(self.template)
		if self.guide.enabled:
			self._set_guide(True, self._clamp_step(self.guide.step_index))

	def enable_guide(self):
		if not self.steps:
			self.steps = compute_steps(self.template)
		step_index = self._clamp_step(self.guide.step_index)
		self._set_guide(True, step_index)
		self._focus_step_page(step_index)

	def disable_guide(self):
		self._set_guide(False, 0)
		self.set_selected_block(None)

	def guide_next(self):
		if not self.steps:
			return
		index = min(len(self.steps) - 1, self.guide.step_index + 1)
		self._set_guide(self.guide.enabled, index)
		self._focus_step_page(index)

	def guide_prev(self):
		if not self.steps:
			return
		index = max(0, self.guide.step_index - 1)
		self._set_guide(self.guide.enabled, index)
		self._focus_step_page(index)

	def guide_skip(self):
		self.guide_next()

	def set_guide_step(self, index):
		index = self._clamp_step(index)
		self._set_guide(self.guide.enabled, index)
		self._focus_step_page(index)

	def _advance_guide_if_current(self, block_id):
		"""Advance when the just-edited block is the current step's block

		Returns:
			True if the guide advanced
		"""
		if not self.guide.enabled or not self.steps:
			return False
		current = self.steps[self._clamp_step(self.guide.step_index)]
		if current.block_id != block_id:
			return False
		index = min(self.guide.step_index + 1, len(self.steps) - 1)
		self._set_guide(True, index)
		self._focus_step_page(index)
		return True
