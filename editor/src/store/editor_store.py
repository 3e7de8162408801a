"""
Drone Report Editor - Editor Store

The single source of truth for an editing session: the loaded draft, its
template, findings, selection, insert tool, guide progress, undo history
and autosave state. Behaviour is split across mixins the same way the
main window splits its concerns; this class wires them together and owns
the collaborators.

Observers subscribe to the Qt signals below; every operation is a plain
method call (or a typed command through dispatch()).
"""

import logging

from PyQt5.QtCore import QObject, pyqtSignal

from models.tool import ToolState, Selection, GuideState
from utils.history_manager import HistoryManager
from services.persistence import PersistenceCoordinator
from actions.commands import dispatch as dispatch_command
from constants import DEFAULT_ZOOM

from .config_mixin import ConfigMixin
from .history_mixin import HistoryMixin
from .tool_mixin import ToolMixin
from .guide_mixin import GuideMixin
from .draft_mixin import DraftMixin
from .blocks_mixin import BlocksMixin
from .findings_mixin import FindingsMixin
from .media_mixin import MediaMixin
from .io_mixin import IOMixin


class EditorStore(ConfigMixin, HistoryMixin, ToolMixin, GuideMixin, DraftMixin,
				  BlocksMixin, FindingsMixin, MediaMixin, IOMixin, QObject):
	draftChanged = pyqtSignal()
	selectionChanged = pyqtSignal(object, object)  # template block id, user block id
	toolChanged = pyqtSignal(object)  # ToolState
	pageIndexChanged = pyqtSignal(int)
	guideChanged = pyqtSignal(bool, int)  # enabled, step index
	historyChanged = pyqtSignal(bool, bool)  # can_undo, can_redo
	saveStateChanged = pyqtSignal(bool, bool)  # saving, dirty
	saved = pyqtSignal(str)
	saveFailed = pyqtSignal(str)

	def __init__(self, draft_store, template_loader, config=None, config_file=None, clock=None, parent=None):
		"""
		Args:
			draft_store: DraftStore used for load and save
			template_loader: TemplateLoader resolving template ids
			config: EditorConfig; loaded from config_file when omitted
			config_file: Path of the JSON config (defaults to the user config dir)
			clock: Millisecond clock for history coalescing (tests inject one)
		"""
		super().__init__(parent)
		self._logger = logging.getLogger('EditorStore')
		self.draft_store = draft_store
		self.template_loader = template_loader
		if config is not None:
			self.config_file = config_file
			self.config = config
		else:
			self.config = self._load_config(config_file)

		# Document state
		self.draft = None
		self.template = None
		self.findings = []
		self.steps = []
		self.page_index = 0

		# Interaction state
		self.selection = Selection()
		self.tool = ToolState.idle()
		self.guide = GuideState()
		self.zoom = DEFAULT_ZOOM
		self.preview_open = False
		self.preview_zoom = DEFAULT_ZOOM

		# Initialize history manager
		self.history = HistoryManager(
			max_history=self.config.history_limit,
			coalesce_ms=self.config.mark_coalesce_ms,
			clock=clock,
		)
		self.history.add_listener(self._on_history_changed)
		# Flag to prevent marking history during undo/redo
		self._is_applying_history = False

		# Autosave
		self.persistence = PersistenceCoordinator(
			draft_store, self._build_save_body, debounce_ms=self.config.save_debounce_ms, parent=self
		)
		self.persistence.saveStateChanged.connect(self.saveStateChanged)
		self.persistence.saved.connect(self.saved)
		self.persistence.saveFailed.connect(self.saveFailed)

	def dispatch(self, command):
		"""Route a typed command (see actions.commands) to its operation"""
		return dispatch_command(self, command)

	def shutdown(self):
		"""Stop timers; pending debounced work is dropped"""
		self.persistence.cancel()
