"""
Drone Report Editor - Persistence Coordinator

Debounced and immediate saving of the in-memory draft to a DraftStore.

- save_debounced() (re)starts a single-shot QTimer; a burst of edits
  collapses into one save of the latest state
- save_now() cancels the pending timer and writes synchronously; on failure
  dirty stays set and the exception is re-raised
- the timer-driven save never lets an exception reach the Qt event loop:
  it is logged and reported through saveFailed

Saves are last-write-wins against the store.
"""

import logging

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from models.finding import now_iso
from utils.logger import loggerRaise
from constants import SAVE_DEBOUNCE_MS


def serialize_draft(draft, findings):
	"""Build the update body for a draft.

	Args:
		draft: Draft being saved
		findings: Live findings list, written into payload.findings

	Returns:
		Dict with pageInstances, media, payload and, when known, templateId/title
	"""
	payload = dict(draft.payload)
	payload['findings'] = list(findings or [])
	body = {
		'pageInstances': [p.to_dict() for p in draft.page_instances],
		'media': list(draft.media),
		'payload': payload,
	}
	if draft.template_id:
		body['templateId'] = draft.template_id

	meta = payload.get('meta') if isinstance(payload.get('meta'), dict) else {}
	meta_title = meta.get('title').strip() if isinstance(meta.get('title'), str) else ''
	title = meta_title or (draft.title or '').strip()
	if title:
		body['title'] = title
	return body


class PersistenceCoordinator(QObject):
	"""Owns the autosave timer and the dirty/saving flags"""

	saveStateChanged = pyqtSignal(bool, bool)  # saving, dirty
	saved = pyqtSignal(str)  # ISO timestamp
	saveFailed = pyqtSignal(str)

	def __init__(self, draft_store, build_body, debounce_ms=SAVE_DEBOUNCE_MS, parent=None):
		"""
		Args:
			draft_store: DraftStore receiving update_draft() calls
			build_body: Callable returning (draft_id, body), or None when no
				draft is loaded
			debounce_ms: Quiet period before a debounced save fires
		"""
		super().__init__(parent)
		self.draft_store = draft_store
		self._build_body = build_body
		self.debounce_ms = debounce_ms
		self.dirty = False
		self.saving = False
		self.last_saved_at = None
		self._logger = logging.getLogger('Persistence')

		self._timer = QTimer(self)
		self._timer.setSingleShot(True)
		self._timer.timeout.connect(self._on_timer)

	# ========================================
	# State
	# ========================================

	def _set_state(self, saving, dirty):
		changed = (saving, dirty) != (self.saving, self.dirty)
		self.saving = saving
		self.dirty = dirty
		if changed:
			self.saveStateChanged.emit(saving, dirty)

	def reset(self, last_saved_at=None):
		"""Forget pending work, e.g. after a fresh load"""
		self._timer.stop()
		self.last_saved_at = last_saved_at
		self._set_state(False, False)

	def mark_dirty(self):
		self._set_state(self.saving, True)

	@property
	def pending(self):
		"""True while a debounced save is scheduled"""
		return self._timer.isActive()

	# ========================================
	# Saving
	# ========================================

	def save_debounced(self):
		"""Schedule a save, replacing any pending one"""
		self._timer.stop()
		self._timer.start(self.debounce_ms)
		self._set_state(True, True)
		self._logger.debug(f"Save scheduled in {self.debounce_ms}ms")

	def cancel(self):
		"""Drop a pending debounced save without writing"""
		if self._timer.isActive():
			self._timer.stop()
			self._set_state(False, self.dirty)
			self._logger.debug("Pending save cancelled")

	def save_now(self):
		"""Write the current state immediately.

		Raises:
			Whatever the draft store raises; dirty is left True
		"""
		self._timer.stop()
		target = self._build_body()
		if target is None:
			self._set_state(False, self.dirty)
			return

		draft_id, body = target
		self._set_state(True, self.dirty)
		try:
			self.draft_store.update_draft(draft_id, body)
		except Exception as e:
			self._set_state(False, True)
			loggerRaise(e, f"Failed to save draft {draft_id}", "Save Error")

		self.last_saved_at = now_iso()
		self._set_state(False, False)
		self._logger.debug(f"Draft {draft_id} saved at {self.last_saved_at}")
		self.saved.emit(self.last_saved_at)

	def _on_timer(self):
		"""Debounced save fired from the event loop"""
		try:
			self.save_now()
		except Exception as e:
			self._logger.warning(f"Autosave failed, changes kept for retry: {e}")
			self.saveFailed.emit(str(e))
