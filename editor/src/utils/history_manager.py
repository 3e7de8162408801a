"""
Undo/Redo History Manager for the Drone Report Editor

Manages a bounded stack of pre-edit snapshots with undo/redo.
Callers mark() BEFORE mutating, so the past stack always holds the states
an undo should return to. Continuous gestures (drags, typing) pass
coalesce=True so a burst of updates becomes one undoable unit.
"""

import copy
import logging
import time

from constants import HISTORY_LIMIT, MARK_COALESCE_MS


def _monotonic_ms():
	return time.monotonic() * 1000.0


class HistoryManager:
	"""Past/future snapshot stacks with coalescing"""

	def __init__(self, max_history=HISTORY_LIMIT, coalesce_ms=MARK_COALESCE_MS, clock=None):
		"""
		Create empty stacks

		Args:
			max_history: Maximum number of snapshots kept on the past stack
			coalesce_ms: Window in which coalesced marks are folded together
			clock: Callable returning the current time in milliseconds
		"""
		self.max_history = max_history
		self.coalesce_ms = coalesce_ms
		self._clock = clock or _monotonic_ms
		self.past = []  # Oldest first
		self.future = []  # Next redo first
		self.last_mark_ts = None
		self._listeners = []
		self._logger = logging.getLogger('HistoryManager')

	def mark(self, state_data, coalesce=False):
		"""
		Record a pre-edit snapshot

		Args:
			state_data: Snapshot of the state about to be changed
			coalesce: Skip if the previous mark was taken within the coalesce window

		Returns:
			True if a snapshot was pushed
		"""
		now = self._clock()
		if coalesce and self.last_mark_ts is not None and now - self.last_mark_ts < self.coalesce_ms:
			return False

		self.past.append(copy.deepcopy(state_data))
		if len(self.past) > self.max_history:
			self.past.pop(0)

		# New edits invalidate redo
		self.future = []
		self.last_mark_ts = now

		self._notify_listeners()
		self._logger.debug(f"Marked (past: {len(self.past)}, coalesce: {coalesce})")
		return True

	def undo(self, current_state):
		"""
		Step back one snapshot

		Args:
			current_state: Snapshot of the live state, kept for redo

		Returns:
			Deep copy of the snapshot to restore, or None if nothing to undo
		"""
		if not self.can_undo():
			self._logger.debug("Cannot undo - past is empty")
			return None

		state = self.past.pop()
		self.future.insert(0, copy.deepcopy(current_state))

		self._notify_listeners()
		self._logger.debug(f"Undo (past: {len(self.past)}, future: {len(self.future)})")
		return copy.deepcopy(state)

	def redo(self, current_state):
		"""
		Step forward one snapshot

		Args:
			current_state: Snapshot of the live state, kept for undo

		Returns:
			Deep copy of the snapshot to restore, or None if nothing to redo
		"""
		if not self.can_redo():
			self._logger.debug("Cannot redo - future is empty")
			return None

		state = self.future.pop(0)
		self.past.append(copy.deepcopy(current_state))
		if len(self.past) > self.max_history:
			self.past.pop(0)

		self._notify_listeners()
		self._logger.debug(f"Redo (past: {len(self.past)}, future: {len(self.future)})")
		return copy.deepcopy(state)

	def can_undo(self):
		"""True while the past stack holds a snapshot"""
		return len(self.past) > 0

	def can_redo(self):
		"""True while the future stack holds a snapshot"""
		return len(self.future) > 0

	def clear(self):
		"""Drop both stacks and forget the last mark time"""
		self.past = []
		self.future = []
		self.last_mark_ts = None
		self._notify_listeners()
		self._logger.debug("History cleared")

	def add_listener(self, callback):
		"""
		Register a callback for stack changes

		Args:
			callback: Called as callback(can_undo, can_redo) after every change
		"""
		self._listeners.append(callback)

	def remove_listener(self, callback):
		"""Unregister a callback; unknown callbacks are ignored"""
		if callback in self._listeners:
			self._listeners.remove(callback)

	def _notify_listeners(self):
		"""Push the current undo/redo availability to every callback"""
		for callback in self._listeners:
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception as exc:
				self._logger.error(f"History listener failed: {exc}")
