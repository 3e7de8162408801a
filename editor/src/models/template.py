"""Report template model and guide step derivation.

Templates are read-only. They supply per-page block definitions used to
seed page values and to derive the guided-wizard steps.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from models.transform import Rect
from constants import TEMPLATE_VALUE_DEFAULTS

_logger = logging.getLogger('Template')


@dataclass(frozen=True)
class TemplateBlock:
    id: str
    type: str
    rect: Rect
    label: str = ''
    placeholder: str = ''
    help: str = ''
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        options = data.get('options')
        help_text = data.get('help')
        return cls(
            id=str(data.get('id') or ''),
            type=str(data.get('type') or ''),
            rect=Rect.from_dict(data.get('rect') if isinstance(data.get('rect'), dict) else None),
            label=str(data.get('label') or ''),
            placeholder=str(data.get('placeholder') or ''),
            help=help_text if isinstance(help_text, str) else '',
            options=dict(options) if isinstance(options, dict) else {},
        )


@dataclass(frozen=True)
class TemplatePage:
    id: str
    name: str = ''
    kind: str = ''
    repeatable: bool = False
    blocks: Tuple[TemplateBlock, ...] = ()

    @classmethod
    def from_dict(cls, data):
        raw_blocks = data.get('blocks') if isinstance(data.get('blocks'), list) else []
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            kind=str(data.get('kind') or ''),
            repeatable=bool(data.get('repeatable', False)),
            blocks=tuple(TemplateBlock.from_dict(b) for b in raw_blocks if isinstance(b, dict)),
        )


@dataclass(frozen=True)
class Template:
    id: str
    name: str = ''
    version: str = ''
    pages: Tuple[TemplatePage, ...] = ()

    def page(self, page_id: str) -> Optional[TemplatePage]:
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Template':
        """Build a Template, tolerating malformed input.

        A missing or non-list 'pages' entry yields a template with no pages.
        """
        data = data if isinstance(data, dict) else {}
        raw_pages = data.get('pages')
        if not isinstance(raw_pages, list):
            if raw_pages is not None:
                _logger.warning(f"Template {data.get('id')!r} has malformed pages: {type(raw_pages).__name__}")
            raw_pages = []
        return cls(
            id=str(data.get('id') or ''),
            name=str(data.get('name') or ''),
            version=str(data.get('version') or ''),
            pages=tuple(TemplatePage.from_dict(p) for p in raw_pages if isinstance(p, dict)),
        )


@dataclass(frozen=True)
class Step:
    """One guided-wizard checkpoint bound to a template block."""
    page_id: str
    block_id: str
    help: str = ''


def compute_steps(template: Optional[Template]) -> List[Step]:
    """Derive guide steps from help-annotated blocks, page-then-block order."""
    if template is None:
        return []
    steps = []
    for page in template.pages:
        for block in page.blocks:
            if block.help.strip():
                steps.append(Step(page.id, block.id, block.help))
    return steps


def default_value_for(block: TemplateBlock) -> Any:
    """Seed value for a template block when a page instance is created."""
    if block.type == 'section':
        return {'kind': block.options.get('kind') or ''}
    return copy.deepcopy(TEMPLATE_VALUE_DEFAULTS.get(block.type, ''))
