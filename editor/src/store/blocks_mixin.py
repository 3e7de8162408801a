"""User block editing for the editor store"""

from models.block import InsertKind, SectionBlock
from models.transform import Vec2, Rect
from models.tool import ToolState
from services.block_operations import (
	new_block_id, create_block, create_section_block, append_block,
	update_block, delete_block, nudge_block, merge_section_props
)
from services import z_order
from constants import SECTION_INSERT_RECT, SECTION_INSERT_RECT_PHOTO_STRIP


def _as_rect(origin):
	if isinstance(origin, Rect):
		return origin
	return Rect.from_dict(origin)


class BlocksMixin:
	"""Place, edit, reorder and delete user blocks on the active page

	Every edit marks history before mutating and schedules a debounced save.
	Unknown block ids are no-ops.
	"""

	def _replace_page(self, index, page):
		self._commit_draft(self.draft.with_page(index, page))

	def _current_page_index(self):
		"""Index of the active page, or -1 when there is none"""
		if self.current_page() is None:
			return -1
		return self.page_index

	# ========================================
	# Placement
	# ========================================

	def place_block(self, page_index, kind, origin):
		"""Place a new block with the armed insert tool

		Args:
			page_index: Page receiving the block
			kind: InsertKind to place
			origin: Rect (or rect dict). For lines, the center point as a
				zero-size rect, or a rect whose center is used

		Returns:
			New block id, or None if no tool is armed or the page is missing
		"""
		if self.draft is None or not self.tool.is_inserting:
			return None
		page = self.draft.page_at(page_index)
		if page is None:
			return None

		self.mark()
		block_id = new_block_id()
		block = create_block(InsertKind(kind), _as_rect(origin), block_id, len(page.user_blocks))
		self.draft = self.draft.with_page(page_index, append_block(page, block))
		self._set_tool(ToolState.idle())
		self.select_user_block(block_id)
		self._commit_draft(self.draft)
		self._logger.debug(f"Placed {block.kind.value} block {block_id}")
		return block_id

	def place_user_block(self, origin):
		"""Place the armed kind on the active page"""
		if not self.tool.is_inserting:
			return None
		return self.place_block(self.page_index, self.tool.kind, origin)

	def insert_section(self, section_kind, origin=None, payload=None):
		"""Place a rect-hosted section block with the kind's default props

		Returns:
			New block id, or None without an active page
		"""
		index = self._current_page_index()
		if index < 0:
			return None
		if origin is None:
			origin = SECTION_INSERT_RECT_PHOTO_STRIP if section_kind == 'photoStrip' else SECTION_INSERT_RECT

		self.mark()
		page = self.draft.page_instances[index]
		block_id = new_block_id()
		block = create_section_block(section_kind, _as_rect(origin), block_id, len(page.user_blocks), payload)
		self.draft = self.draft.with_page(index, append_block(page, block))
		self._set_tool(ToolState.idle())
		self.select_user_block(block_id)
		self._commit_draft(self.draft)
		return block_id

	# ========================================
	# Edits
	# ========================================

	def update_user_block(self, block_id, patch):
		"""Field-wise merge of a patch into one block (coalesced)"""
		index = self._current_page_index()
		if index < 0:
			return
		page = self.draft.page_instances[index]
		if page.find_block(block_id) is None:
			self._logger.debug(f"update_user_block: unknown block {block_id}")
			return

		self.mark(coalesce=True)
		self._replace_page(index, update_block(page, block_id, patch))

	def delete_user_block(self, block_id):
		index = self._current_page_index()
		if index < 0:
			return
		page = self.draft.page_instances[index]
		if page.find_block(block_id) is None:
			return

		self.mark()
		self.draft = self.draft.with_page(index, delete_block(page, block_id))
		if self.selected_user_block_id == block_id:
			self.select_user_block(None)
		self._commit_draft(self.draft)

	def set_line_points(self, block_id, points):
		"""Replace both endpoints of a line (each clamped on its own)"""
		raw = [p.to_dict() if isinstance(p, Vec2) else p for p in points]
		self.update_user_block(block_id, {'points': raw})

	def nudge_selected(self, dx, dy):
		"""Move the selected block by a percent delta (coalesced)"""
		block_id = self.selected_user_block_id
		index = self._current_page_index()
		if not block_id or index < 0:
			return
		page = self.draft.page_instances[index]
		if page.find_block(block_id) is None:
			return

		self.mark(coalesce=True)
		self._replace_page(index, nudge_block(page, block_id, dx, dy))

	def set_text_style(self, block_id, style_patch):
		self.update_user_block(block_id, {'style': dict(style_patch)})

	def set_block_fill(self, block_id, fill):
		self.update_user_block(block_id, {'blockStyle': {'fill': fill}})

	def set_block_stroke(self, block_id, stroke_patch):
		self.update_user_block(block_id, {'blockStyle': {'stroke': dict(stroke_patch)}})

	def set_block_radius(self, block_id, radius):
		self.update_user_block(block_id, {'blockStyle': {'radius': radius}})

	def set_block_opacity(self, block_id, opacity):
		self.update_user_block(block_id, {'blockStyle': {'opacity': opacity}})

	def set_block_rotation(self, block_id, rotation):
		self.update_user_block(block_id, {'rotation': rotation})

	def update_block_props(self, block_id, props_patch):
		"""Merge into a section block's meta.props (coalesced)"""
		index = self._current_page_index()
		if index < 0:
			return
		page = self.draft.page_instances[index]
		if not isinstance(page.find_block(block_id), SectionBlock):
			self._logger.debug(f"update_block_props: {block_id} is not a section block")
			return

		self.mark(coalesce=True)
		self._replace_page(index, merge_section_props(page, block_id, props_patch))

	# ========================================
	# Z-order
	# ========================================

	def _reorder(self, block_id, reorder):
		index = self._current_page_index()
		if index < 0:
			return False
		page = self.draft.page_instances[index]
		blocks = reorder(page.user_blocks, block_id)
		if blocks is None:
			return False
		self.mark()
		self._replace_page(index, page.with_blocks(blocks))
		return True

	def bring_forward(self, block_id):
		"""Swap a block with its front neighbour

		Returns:
			False when the block is missing or already frontmost
		"""
		return self._reorder(block_id, z_order.bring_forward)

	def send_backward(self, block_id):
		"""Swap a block with its back neighbour

		Returns:
			False when the block is missing or already backmost
		"""
		return self._reorder(block_id, z_order.send_backward)
