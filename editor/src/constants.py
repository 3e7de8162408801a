"""
Drone Report Editor - Constants and Configuration

This module contains all constant values used by the block-editing engine:
- Percent-space geometry limits
- Default block styles and insert sizes
- Rotation snapping
- History and autosave timing
- Template value defaults and section block props

All geometry is expressed in page-percent units [0, 100].
"""

# ======================================================================
# PERCENT-SPACE GEOMETRY
# ======================================================================

# X-axis: 0 = left edge, 100 = right edge
# Y-axis: 0 = TOP edge, 100 = bottom edge

PERCENT_MIN = 0.0
PERCENT_MAX = 100.0

# Minimum block dimensions (rect geometry)
MIN_W = 6.0
MIN_H = 6.0

# Lines are placed as a horizontal segment around the click center
LINE_HALF_LENGTH = 10.0

# ======================================================================
# INSERT DEFAULTS
# ======================================================================

# Box size used when a canvas click places a text/rect/ellipse/divider
CLICK_INSERT_W = 40.0
CLICK_INSERT_H = 8.0

# User image blocks created by media drops
IMAGE_BLOCK_W = 30.0
IMAGE_BLOCK_H = 22.0
IMAGE_APPEND_X = 10.0
IMAGE_APPEND_Y = 10.0

# Section blocks hosted in a rect user block
SECTION_INSERT_RECT = {'x': 10.0, 'y': 10.0, 'w': 80.0, 'h': 24.0}
SECTION_INSERT_RECT_PHOTO_STRIP = {'x': 10.0, 'y': 10.0, 'w': 80.0, 'h': 18.0}

# Arrow-key nudge amounts (percent)
NUDGE_NORMAL = 1.0
NUDGE_FINE = 0.2

# ======================================================================
# DEFAULT STYLES
# ======================================================================

DEFAULT_TEXT_STYLE = {
    'fontFamily': "system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif",
    'fontSize': 14,
    'bold': False,
    'italic': False,
    'underline': False,
    'align': 'left',
    'color': '#111827',
    'lineHeight': 1.4,
    'letterSpacing': 0,
}

# Rect/ellipse: surface fill + 1px stroke
DEFAULT_SHAPE_FILL = {'token': 'surface'}
DEFAULT_SHAPE_STROKE_WIDTH = 1

DEFAULT_LINE_STROKE_WIDTH = 2
DEFAULT_DIVIDER_STROKE_WIDTH = 1

# ======================================================================
# ROTATION
# ======================================================================

DEFAULT_ROTATION = 0.0

# Shift-drag snapping: nearest step, then specials within tolerance
ROTATION_SNAP_STEP = 15.0
ROTATION_SNAP_TOLERANCE = 2.0
RECT_ROTATION_SPECIALS = (0.0, 90.0, -90.0, 180.0, -180.0)
LINE_ROTATION_SPECIALS = (0.0, 90.0, -90.0)

# Offset of the rotation HUD from the cursor (pixels)
ROTATION_HUD_CURSOR_OFFSET = 12

# ======================================================================
# HISTORY MANAGEMENT
# ======================================================================

HISTORY_LIMIT = 50

# Coalesced marks closer than this are folded into the previous entry
MARK_COALESCE_MS = 300

# ======================================================================
# AUTOSAVE
# ======================================================================

SAVE_DEBOUNCE_MS = 800

# ======================================================================
# VIEW
# ======================================================================

ZOOM_MIN = 0.25
ZOOM_MAX = 2.0
PREVIEW_ZOOM_MIN = 0.5
PREVIEW_ZOOM_MAX = 3.0
DEFAULT_ZOOM = 1.0

# ======================================================================
# CURSORS
# ======================================================================

# Cursor names surfaced to the presentation layer during a drag
CURSOR_MOVE = 'move'
CURSOR_EW_RESIZE = 'ew-resize'
CURSOR_NWSE_RESIZE = 'nwse-resize'
CURSOR_GRABBING = 'grabbing'

# ======================================================================
# FINDINGS
# ======================================================================

DEFAULT_FINDING_SEVERITY = 3

# ======================================================================
# TEMPLATE VALUE DEFAULTS
# ======================================================================

# Seed value per template block type when page instances are rebuilt
# ('section' is seeded from its options.kind)
TEMPLATE_VALUE_DEFAULTS = {
    'text': '',
    'divider': '',
    'line': '',
    'rect': '',
    'ellipse': '',
    'image_slot': '',
    'table': [],
    'badge': {'label': '', 'color': 'gray'},
    'repeater': {'count': 0},
}

# ======================================================================
# SECTION BLOCKS
# ======================================================================

SECTION_DEFAULT_PROPS = {
    'severityOverview': {'showIcons': True},
    'findingsTable': {'pageSize': 6, 'showSeverityIcons': False},
    'photoStrip': {'count': 3},
    'siteProperties': {
        'address': '',
        'peakPowerMWp': 0,
        'panelCount': 0,
        'inclinationDeg': 0,
        'orientation': '',
        'areaHa': 0,
        'panelModel': '',
        'inverterModel': '',
    },
    'inspectionDetails': {'showIcons': True, 'cols': 2},
    'orthoPair': {
        'layout': 'horizontal',
        'showNorth': True,
        'showScale': True,
        'leftLabel': 'Ortho',
        'rightLabel': 'Detail',
    },
    'thermalAnomalies': {'pageSize': 8, 'showDelta': True, 'unit': '°C'},
}

# ======================================================================
# CONFIG FILE
# ======================================================================

CONFIG_DIR_NAME = '.drone_report_editor'
CONFIG_FILE_NAME = 'config.json'
