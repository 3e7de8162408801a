"""Typed editor commands and their routing onto the EditorStore.

Each command is a frozen value naming one store operation. dispatch()
looks up the handler by command type and returns the operation's plain
result (e.g. a new block id), so a presentation layer can drive the editor
without touching store internals.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence


# ======================================================================
# Blocks
# ======================================================================

@dataclass(frozen=True)
class PlaceBlock:
	"""Place a block with the armed tool. kind/page_index default to the armed kind and active page."""
	origin: Any  # Rect or rect dict; lines use a zero-size rect at the center
	kind: Optional[str] = None
	page_index: Optional[int] = None


@dataclass(frozen=True)
class UpdateBlock:
	block_id: str
	patch: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DeleteBlock:
	block_id: str


@dataclass(frozen=True)
class BringForward:
	block_id: str


@dataclass(frozen=True)
class SendBackward:
	block_id: str


@dataclass(frozen=True)
class SetLinePoints:
	block_id: str
	points: Sequence[Any]


@dataclass(frozen=True)
class Nudge:
	"""Move the selected block by a percent delta."""
	dx: float
	dy: float


@dataclass(frozen=True)
class Rotate:
	block_id: str
	rotation: float


# ======================================================================
# Document
# ======================================================================

@dataclass(frozen=True)
class SetValue:
	page_id: str
	block_id: str
	value: Any


@dataclass(frozen=True)
class SelectTemplate:
	template_id: str


@dataclass(frozen=True)
class SetPageIndex:
	index: int


@dataclass(frozen=True)
class Undo:
	pass


@dataclass(frozen=True)
class Redo:
	pass


# ======================================================================
# Tool
# ======================================================================

@dataclass(frozen=True)
class StartInsert:
	kind: str


@dataclass(frozen=True)
class CancelInsert:
	pass


# ======================================================================
# Guide
# ======================================================================

@dataclass(frozen=True)
class EnableGuide:
	pass


@dataclass(frozen=True)
class DisableGuide:
	pass


@dataclass(frozen=True)
class GuideNext:
	pass


@dataclass(frozen=True)
class GuidePrev:
	pass


@dataclass(frozen=True)
class GuideSkip:
	pass


@dataclass(frozen=True)
class SetGuideStep:
	index: int


# ======================================================================
# Persistence
# ======================================================================

@dataclass(frozen=True)
class SaveNow:
	pass


@dataclass(frozen=True)
class SetDraftTitle:
	title: str


def _place(store, c):
	if c.kind is not None and (not store.tool.is_inserting or store.tool.kind.value != c.kind):
		store.start_insert(c.kind)
	page_index = store.page_index if c.page_index is None else c.page_index
	if not store.tool.is_inserting:
		return None
	return store.place_block(page_index, store.tool.kind, c.origin)


_HANDLERS = {
	PlaceBlock: _place,
	UpdateBlock: lambda s, c: s.update_user_block(c.block_id, c.patch),
	DeleteBlock: lambda s, c: s.delete_user_block(c.block_id),
	BringForward: lambda s, c: s.bring_forward(c.block_id),
	SendBackward: lambda s, c: s.send_backward(c.block_id),
	SetLinePoints: lambda s, c: s.set_line_points(c.block_id, c.points),
	Nudge: lambda s, c: s.nudge_selected(c.dx, c.dy),
	Rotate: lambda s, c: s.set_block_rotation(c.block_id, c.rotation),
	SetValue: lambda s, c: s.set_value(c.page_id, c.block_id, c.value),
	SelectTemplate: lambda s, c: s.select_template(c.template_id),
	SetPageIndex: lambda s, c: s.set_page_index(c.index),
	Undo: lambda s, c: s.undo(),
	Redo: lambda s, c: s.redo(),
	StartInsert: lambda s, c: s.start_insert(c.kind),
	CancelInsert: lambda s, c: s.cancel_insert(),
	EnableGuide: lambda s, c: s.enable_guide(),
	DisableGuide: lambda s, c: s.disable_guide(),
	GuideNext: lambda s, c: s.guide_next(),
	GuidePrev: lambda s, c: s.guide_prev(),
	GuideSkip: lambda s, c: s.guide_skip(),
	SetGuideStep: lambda s, c: s.set_guide_step(c.index),
	SaveNow: lambda s, c: s.save_now(),
	SetDraftTitle: lambda s, c: s.set_draft_title(c.title),
}


def dispatch(store, command):
	"""Run a command against a store

	Returns:
		The operation's result (None for void operations)

	Raises:
		TypeError: If the command type is not known
	"""
	handler = _HANDLERS.get(type(command))
	if handler is None:
		raise TypeError(f"Unknown editor command: {type(command).__name__}")
	return handler(store, command)
