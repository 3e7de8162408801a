"""Binding uploaded media into pages for the editor store"""

from models.transform import Vec2
from services.block_operations import new_block_id, create_image_block, append_block
from constants import IMAGE_APPEND_X, IMAGE_APPEND_Y


class MediaMixin:
	"""Media drops: fill a template image slot, else place a user image block"""

	def _media_target(self, page_id):
		"""Resolve (page index, template page) for a media insert, or None"""
		if self.draft is None or self.template is None:
			return None
		index = self.draft.page_index_of(page_id)
		if index < 0:
			return None
		template_page = self.template.page(self.draft.page_instances[index].template_page_id)
		if template_page is None:
			return None
		return index, template_page

	def _bind_slot(self, index, slot_id, url, advance_guide):
		page = self.draft.page_instances[index].with_value(slot_id, url)
		self.draft = self.draft.with_page(index, page)
		self.set_selected_block(slot_id)
		if advance_guide:
			self._advance_guide_if_current(slot_id)
		self._commit_draft(self.draft)

	def _append_image(self, index, x, y, url):
		page = self.draft.page_instances[index]
		block_id = new_block_id()
		block = create_image_block(x, y, url, block_id, len(page.user_blocks))
		self.draft = self.draft.with_page(index, append_block(page, block))
		self.select_user_block(block_id)
		self._commit_draft(self.draft)

	def insert_image_at_point(self, page_id, point, media):
		"""Bind media at a page point

		The image slot under the point wins, then the page's first image slot;
		binding a slot advances the guide like set_value. Without any slot a
		user image block is created at the point.

		Args:
			point: Vec2 or {'x', 'y'} in percent units
			media: Dict with at least 'url'

		Returns:
			False without a draft, template or matching page
		"""
		target = self._media_target(page_id)
		if target is None:
			return False
		index, template_page = target
		if not isinstance(point, Vec2):
			point = Vec2.from_dict(point)

		slots = [b for b in template_page.blocks if b.type == 'image_slot']
		under = [b for b in slots if b.rect.contains(point.x, point.y)]
		slot = under[0] if under else (slots[0] if slots else None)

		self.mark()
		if slot is not None:
			self._bind_slot(index, slot.id, media.get('url', ''), advance_guide=True)
		else:
			self._append_image(index, point.x, point.y, media.get('url', ''))
		return True

	def insert_image_append(self, page_id, media):
		"""Fill the first empty image slot, else the first slot, else add an image block

		Returns:
			False without a draft, template or matching page
		"""
		target = self._media_target(page_id)
		if target is None:
			return False
		index, template_page = target
		values = self.draft.page_instances[index].values

		slots = [b for b in template_page.blocks if b.type == 'image_slot']
		empty = [b for b in slots if not values.get(b.id)]
		slot = empty[0] if empty else (slots[0] if slots else None)

		self.mark()
		if slot is not None:
			self._bind_slot(index, slot.id, media.get('url', ''), advance_guide=False)
		else:
			self._append_image(index, IMAGE_APPEND_X, IMAGE_APPEND_Y, media.get('url', ''))
		return True
