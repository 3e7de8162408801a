"""Selection and insert-tool state for the editor store"""

from models.tool import ToolState, Selection


class ToolMixin:
	"""Insert-tool arming and block selection"""

	@property
	def selected_block_id(self):
		return self.selection.block_id

	@property
	def selected_user_block_id(self):
		return self.selection.user_block_id

	def _set_selection(self, block_id, user_block_id):
		selection = Selection(block_id, user_block_id)
		if selection != self.selection:
			self.selection = selection
			self.selectionChanged.emit(block_id, user_block_id)

	def _set_tool(self, tool):
		if tool != self.tool:
			self.tool = tool
			self.toolChanged.emit(tool)

	def start_insert(self, kind):
		"""Arm the insert tool; the next canvas click places a block of this kind"""
		self._set_tool(ToolState.insert(kind))
		self._set_selection(self.selected_block_id, None)

	def cancel_insert(self):
		self._set_tool(ToolState.idle())

	def select_user_block(self, block_id):
		self._set_selection(self.selected_block_id, block_id)

	def set_selected_block(self, block_id):
		"""Select a template block (value editing / guide focus)"""
		self._set_selection(block_id, self.selected_user_block_id)

	def escape(self):
		"""Disarm the insert tool, else drop the user block selection

		Returns:
			True if anything changed
		"""
		if self.tool.is_inserting:
			self.cancel_insert()
			return True
		if self.selected_user_block_id:
			self.select_user_block(None)
			return True
		return False
