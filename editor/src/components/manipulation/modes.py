"""Drag modes - defines which handles exist for each block family."""

from .handles import (
	SimpleMoveHandle, SimpleResizeHandle,
	RectMoveHandle, RectResizeHandle, RectRotateHandle,
	LineEndpointHandle, LineMoveHandle, LineRotateHandle
)


class DragMode:
	"""Base class for drag modes."""

	def __init__(self):
		self.handles = {}  # mode name -> handle object

	def get_handle(self, name):
		"""Handle for a mode name, or None if this family has no such handle."""
		return self.handles.get(name)


class SimpleDragMode(DragMode):
	"""Text and image blocks: move plus two resize grips."""

	def __init__(self):
		super().__init__()
		self.handles = {
			'move': SimpleMoveHandle(),
			'resize-tl': SimpleResizeHandle('resize-tl'),
			'resize-right': SimpleResizeHandle('resize-right'),
		}


class RectDragMode(DragMode):
	"""Rect, ellipse and section blocks: move, rotate and 8 compass grips."""

	def __init__(self):
		super().__init__()
		self.handles = {
			'move': RectMoveHandle(),
			'rotate': RectRotateHandle(),
		}
		for compass in ('n', 's', 'e', 'w', 'ne', 'nw', 'se', 'sw'):
			self.handles[compass] = RectResizeHandle(compass)


class LineDragMode(DragMode):
	"""Line blocks: either endpoint, move and rotate."""

	def __init__(self):
		super().__init__()
		self.handles = {
			'p1': LineEndpointHandle('p1'),
			'p2': LineEndpointHandle('p2'),
			'move': LineMoveHandle(),
			'rotate': LineRotateHandle(),
		}


DRAG_MODES = {
	'simple': SimpleDragMode(),
	'rect': RectDragMode(),
	'line': LineDragMode(),
}
