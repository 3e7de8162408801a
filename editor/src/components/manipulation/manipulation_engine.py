"""
Drone Report Editor - Manipulation Engine

Turns raw pointer and key events from the presentation layer into block
edits on the EditorStore.

One DragSession at most exists at a time. It is created by a begin_*()
call on press, fed by pointer_move(), and dropped by pointer_up(). Every
event carries the live page surface rect, so pixel deltas are converted
with the current surface size even if the window was resized mid-drag.
A missing session or an unusable surface makes the handler a no-op.

Escape never cancels a drag in progress; it only disarms the insert tool
or clears the block selection.
"""

import logging

from PyQt5.QtCore import QObject, Qt, pyqtSignal

from models.block import LineBlock, has_rect
from models.transform import Rect
from utils.geometry import (
    client_to_percent, pixel_delta_to_percent, angle_between, midpoint,
    normalize_degrees, segment_degrees, round_half_up
)
from .drag_session import DragSession, RotationHud
from .modes import DRAG_MODES
from constants import (
    PERCENT_MAX, CLICK_INSERT_W, CLICK_INSERT_H, ROTATION_HUD_CURSOR_OFFSET,
    NUDGE_NORMAL, NUDGE_FINE
)

_ARROW_DELTAS = {
    Qt.Key_Left: (-1, 0),
    Qt.Key_Right: (1, 0),
    Qt.Key_Up: (0, -1),
    Qt.Key_Down: (0, 1),
}


def _has_modifier(modifiers, flag):
    return bool(int(modifiers or 0) & int(flag))


class ManipulationEngine(QObject):
    """Pointer-drag state machines and canvas keyboard routing"""

    cursorChanged = pyqtSignal(str)
    rotationHudChanged = pyqtSignal(object)  # RotationHud
    sessionChanged = pyqtSignal(bool)  # True while window-level move/up listeners are needed

    def __init__(self, store, parent=None):
        """
        Args:
            store: EditorStore receiving the edits
        """
        super().__init__(parent)
        self.store = store
        self.session = None
        self.cursor = ''
        self.rotation_hud = RotationHud.inactive()
        self._logger = logging.getLogger('ManipulationEngine')

    # ========================================
    # Session lifecycle
    # ========================================

    def begin_simple_drag(self, mode, block_id, client_x, client_y, surface=None):
        """Start a move / resize-tl / resize-right drag on a text or image block"""
        return self._begin('simple', mode, block_id, client_x, client_y, surface)

    def begin_rect_drag(self, mode, block_id, client_x, client_y, surface=None):
        """Start a move / rotate / compass-resize drag on a rect-like block"""
        return self._begin('rect', mode, block_id, client_x, client_y, surface)

    def begin_line_drag(self, mode, block_id, client_x, client_y, surface=None):
        """Start a p1 / p2 / move / rotate drag on a line block"""
        return self._begin('line', mode, block_id, client_x, client_y, surface)

    def _begin(self, kind, mode, block_id, client_x, client_y, surface):
        handle = DRAG_MODES[kind].get_handle(mode)
        if handle is None:
            self._logger.warning(f"Unknown {kind} drag mode: {mode}")
            return False

        page = self.store.current_page()
        block = page.find_block(block_id) if page is not None else None
        if block is None:
            self._logger.debug(f"Drag ignored, block {block_id} not on current page")
            return False

        if kind == 'line':
            if not isinstance(block, LineBlock):
                return False
            center = midpoint(block.p1, block.p2)
            session = DragSession(
                kind, mode, block_id, client_x, client_y,
                start_points=tuple(block.points), center=center,
                start_cursor_angle=self._start_angle(mode, client_x, client_y, surface, center),
                prev_cursor=self.cursor,
            )
            start_deg = segment_degrees(block.p1, block.p2)
        else:
            if not has_rect(block):
                return False
            rotation = getattr(block, 'rotation', 0.0) or 0.0
            center = block.rect.center
            session = DragSession(
                kind, mode, block_id, client_x, client_y,
                start_rect=block.rect, start_rotation=rotation, center=center,
                start_cursor_angle=self._start_angle(mode, client_x, client_y, surface, center),
                prev_cursor=self.cursor,
            )
            start_deg = normalize_degrees(rotation)

        # A new press supersedes any stale session
        self.session = session
        self._set_cursor(handle.cursor)
        self.store.select_user_block(block_id)
        self.sessionChanged.emit(True)
        self._logger.debug(f"Drag started: {kind}/{mode} on {block_id}")

        if session.is_rotate and surface is not None:
            self._set_hud(start_deg, client_x, client_y, surface, block_id)
        return True

    @staticmethod
    def _start_angle(mode, client_x, client_y, surface, center):
        if mode != 'rotate':
            return 0.0
        point = client_to_percent(client_x, client_y, surface, clamped=False)
        if point is None:
            return 0.0
        return angle_between(point, center)

    def pointer_move(self, client_x, client_y, modifiers=Qt.NoModifier, surface=None):
        """Apply the active drag for a pointer position.

        Args:
            client_x, client_y: Pointer position in client pixels
            modifiers: Qt keyboard modifiers (Shift snaps rotation)
            surface: Live SurfaceRect of the page

        Returns:
            True if an edit was applied
        """
        session = self.session
        if session is None:
            return False
        delta = pixel_delta_to_percent(client_x - session.start_x, client_y - session.start_y, surface)
        if delta is None:
            return False

        handle = DRAG_MODES[session.kind].get_handle(session.mode)
        pointer = client_to_percent(client_x, client_y, surface)
        shift = _has_modifier(modifiers, Qt.ShiftModifier)
        update = handle.drag(session, delta[0], delta[1], pointer, shift)

        if 'points' in update.patch:
            self.store.set_line_points(session.block_id, update.patch['points'])
        else:
            self.store.update_user_block(session.block_id, update.patch)

        if update.hud_deg is not None:
            self._set_hud(update.hud_deg, client_x, client_y, surface, session.block_id)
        return True

    def pointer_up(self):
        """End the active drag, restoring the cursor and hiding the HUD"""
        session = self.session
        if session is None:
            return
        self.session = None
        self._set_cursor(session.prev_cursor)
        if session.is_rotate:
            self.rotation_hud = RotationHud.inactive()
            self.rotationHudChanged.emit(self.rotation_hud)
        self.sessionChanged.emit(False)
        self._logger.debug(f"Drag ended: {session.kind}/{session.mode} on {session.block_id}")

    @property
    def dragging(self):
        return self.session is not None

    def _set_cursor(self, cursor):
        if cursor != self.cursor:
            self.cursor = cursor
            self.cursorChanged.emit(cursor)

    def _set_hud(self, deg, client_x, client_y, surface, block_id):
        self.rotation_hud = RotationHud(
            active=True,
            deg=int(round_half_up(deg)),
            cursor_x=client_x - surface.left + ROTATION_HUD_CURSOR_OFFSET,
            cursor_y=client_y - surface.top + ROTATION_HUD_CURSOR_OFFSET,
            target_id=block_id,
        )
        self.rotationHudChanged.emit(self.rotation_hud)

    # ========================================
    # Canvas clicks
    # ========================================

    def canvas_click(self, client_x, client_y, surface):
        """Place a block with the armed insert tool.

        Lines are centred on the click; other kinds get a default box at the
        click, pulled back to fit the page.

        Returns:
            New block id, or None if no tool is armed or the surface is unusable
        """
        if not self.store.tool.is_inserting:
            return None
        point = client_to_percent(client_x, client_y, surface)
        if point is None:
            return None

        if self.store.tool.kind.value == 'line':
            return self.store.place_user_block(Rect(point.x, point.y, 0.0, 0.0))
        origin = Rect(
            min(point.x, PERCENT_MAX - CLICK_INSERT_W),
            min(point.y, PERCENT_MAX - CLICK_INSERT_H),
            CLICK_INSERT_W, CLICK_INSERT_H,
        )
        return self.store.place_user_block(origin)

    def background_press(self):
        """Press on empty page background clears the block selection"""
        if self.store.tool.is_inserting:
            return
        self.store.select_user_block(None)

    def drop_media(self, client_x, client_y, surface, media):
        """Bind dropped media at the drop point on the current page.

        Args:
            media: Dict with 'url' (and 'draftId' when dragged from a media panel)

        Returns:
            True if the media was placed
        """
        draft = self.store.draft
        page = self.store.current_page()
        if draft is None or page is None or not media:
            return False
        if media.get('draftId') not in (None, draft.id):
            self._logger.debug("Drop ignored, media belongs to another draft")
            return False
        point = client_to_percent(client_x, client_y, surface)
        if point is None:
            return False
        return self.store.insert_image_at_point(page.id, point, media)

    # ========================================
    # Keyboard
    # ========================================

    def key_press(self, key, modifiers=Qt.NoModifier, typing=False):
        """Route a canvas key press.

        Args:
            key: Qt.Key value
            modifiers: Qt keyboard modifiers
            typing: True when a text field has focus

        Returns:
            True if the key was handled
        """
        store = self.store
        if key == Qt.Key_Escape:
            # Never ends a drag in progress
            return store.escape()

        if typing:
            return False

        command = _has_modifier(modifiers, Qt.ControlModifier) or _has_modifier(modifiers, Qt.MetaModifier)
        if command and key == Qt.Key_Z:
            if _has_modifier(modifiers, Qt.ShiftModifier):
                store.redo()
            else:
                store.undo()
            return True

        if key in (Qt.Key_Delete, Qt.Key_Backspace) and not command:
            if store.selected_user_block_id:
                store.delete_user_block(store.selected_user_block_id)
                return True
            return False

        if key in _ARROW_DELTAS and not command and store.selected_user_block_id:
            step = NUDGE_FINE if _has_modifier(modifiers, Qt.ShiftModifier) else NUDGE_NORMAL
            sx, sy = _ARROW_DELTAS[key]
            store.nudge_selected(sx * step, sy * step)
            return True

        return False
