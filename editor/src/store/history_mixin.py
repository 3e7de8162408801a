"""History management and undo/redo for the editor store"""

from dataclasses import replace


class HistoryMixin:
	"""Snapshot capture/restore around the HistoryManager stacks"""

	def _capture_current_state(self):
		"""Capture the draft-relevant state for history

		Returns:
			Snapshot dict, or None when no draft is loaded
		"""
		draft = self.draft
		if draft is None:
			return None
		return {
			'page_instances': draft.page_instances,
			'media': draft.media,
			'template_id': draft.template_id,
			'payload_meta': draft.meta,
			'payload_theme': draft.payload.get('theme'),
			'findings': self.findings,
			'page_index': self.page_index,
			'selected_block_id': self.selected_block_id,
			'selected_user_block_id': self.selected_user_block_id,
		}

	def _restore_state(self, state):
		"""Restore a snapshot into the live draft"""
		if not state or self.draft is None:
			return

		self._is_applying_history = True
		try:
			meta = dict(self.draft.meta)
			meta.update(state['payload_meta'] or {})
			payload = dict(self.draft.payload)
			payload['meta'] = meta
			if state['payload_theme'] is not None:
				payload['theme'] = state['payload_theme']

			self.draft = replace(
				self.draft,
				page_instances=state['page_instances'],
				media=state['media'],
				template_id=state['template_id'],
				payload=payload,
			)
			self.findings = state['findings']
			self.page_index = state['page_index']
			self._set_selection(state['selected_block_id'], state['selected_user_block_id'])
		finally:
			self._is_applying_history = False

		self.draftChanged.emit()
		self.pageIndexChanged.emit(self.page_index)

	def mark(self, coalesce=False):
		"""Record the current state before an edit

		Args:
			coalesce: Fold into the previous entry if it was taken moments ago
		"""
		if self._is_applying_history:
			return  # Don't save state during undo/redo
		state = self._capture_current_state()
		if state is None:
			return
		self.history.mark(state, coalesce=coalesce)

	def _on_history_changed(self, can_undo, can_redo):
		"""Called when history state changes to update listeners"""
		self.historyChanged.emit(can_undo, can_redo)

	@property
	def can_undo(self):
		return self.history.can_undo()

	@property
	def can_redo(self):
		return self.history.can_redo()

	def undo(self):
		"""Undo the last action"""
		current = self._capture_current_state()
		if current is None:
			return
		state = self.history.undo(current)
		if state:
			self._restore_state(state)
			self.save_debounced()

	def redo(self):
		"""Redo the last undone action"""
		current = self._capture_current_state()
		if current is None:
			return
		state = self.history.redo(current)
		if state:
			self._restore_state(state)
			self.save_debounced()
