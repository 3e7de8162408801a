"""
Drone Report Editor - Data Models

This package contains the data model classes for the report draft.
This is the MODEL in MVC architecture: frozen values, no Qt.

Modules:
- transform: Vec2, Rect, SurfaceRect
- block: the UserBlock sum type and its patch/clamp rules
- draft: Draft and PageInstance
- template: Template, guide Step derivation, default values
- finding: inspection finding helpers
- tool: ToolState, Selection, GuideState

Import from the submodules directly.
"""
