"""
Drone Report Editor - Draft Data Model

A Draft is the persisted document being edited:

    Draft
      ├── payload            free-form bag (meta, findings, theme)
      ├── media              uploaded media descriptors
      └── page_instances     ordered PageInstance tuple
            ├── values       template-block-id -> bound value
            └── user_blocks  ordered UserBlock tuple (dense z == index)

Drafts and pages are frozen. Mutations go through dataclasses.replace, so an
edit only rebuilds the page it touches; every other page and block object
is shared with the previous version.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from models.block import UserBlock, block_from_dict, with_z

_logger = logging.getLogger('Draft')


def normalize_z(blocks) -> Tuple[UserBlock, ...]:
    """Sort blocks by z (stable) and renumber z densely as 0..n-1.

    Returns:
        Tuple of blocks whose z equals their index
    """
    ordered = sorted(enumerate(blocks), key=lambda item: (item[1].z, item[0]))
    return tuple(with_z(block, i) for i, (_, block) in enumerate(ordered))


@dataclass(frozen=True)
class PageInstance:
    id: str
    template_page_id: str
    values: Dict[str, Any] = field(default_factory=dict)
    user_blocks: Tuple[UserBlock, ...] = ()

    def find_block(self, block_id: str) -> Optional[UserBlock]:
        for block in self.user_blocks:
            if block.id == block_id:
                return block
        return None

    def index_of(self, block_id: str) -> int:
        for i, block in enumerate(self.user_blocks):
            if block.id == block_id:
                return i
        return -1

    def with_blocks(self, blocks) -> 'PageInstance':
        """Copy of the page with blocks re-normalized."""
        return replace(self, user_blocks=normalize_z(blocks))

    def with_value(self, block_id: str, value: Any) -> 'PageInstance':
        values = dict(self.values)
        values[block_id] = value
        return replace(self, values=values)

    def to_dict(self):
        return {
            'id': self.id,
            'templatePageId': self.template_page_id,
            'values': dict(self.values),
            'userBlocks': [b.to_dict() for b in self.user_blocks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PageInstance':
        raw_blocks = data.get('userBlocks') if isinstance(data.get('userBlocks'), list) else []
        blocks = []
        for i, raw in enumerate(raw_blocks):
            block = block_from_dict(raw, fallback_z=i)
            if block is not None:
                blocks.append(block)
        values = data.get('values') if isinstance(data.get('values'), dict) else {}
        return cls(
            id=str(data.get('id') or ''),
            template_page_id=str(data.get('templatePageId') or ''),
            values=dict(values),
            user_blocks=normalize_z(blocks),
        )


@dataclass(frozen=True)
class Draft:
    id: str
    title: str = ''
    template_id: Optional[str] = None
    media: List[Dict[str, Any]] = field(default_factory=list)
    page_instances: Tuple[PageInstance, ...] = ()
    payload: Dict[str, Any] = field(default_factory=dict)
    status: str = 'draft'
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    # ========================================
    # Queries
    # ========================================

    def page_at(self, index: int) -> Optional[PageInstance]:
        if 0 <= index < len(self.page_instances):
            return self.page_instances[index]
        return None

    def page_index_of(self, page_id: str) -> int:
        for i, page in enumerate(self.page_instances):
            if page.id == page_id:
                return i
        return -1

    def page_index_for_template_page(self, template_page_id: str) -> int:
        for i, page in enumerate(self.page_instances):
            if page.template_page_id == template_page_id:
                return i
        return -1

    @property
    def meta(self) -> Dict[str, Any]:
        meta = self.payload.get('meta')
        return meta if isinstance(meta, dict) else {}

    @property
    def findings(self) -> List[Dict[str, Any]]:
        findings = self.payload.get('findings')
        return findings if isinstance(findings, list) else []

    @property
    def resolved_template_id(self) -> str:
        """Template id from payload.meta, falling back to the root field."""
        return str(self.meta.get('templateId') or self.template_id or '')

    # ========================================
    # Copy-on-write helpers
    # ========================================

    def with_page(self, index: int, page: PageInstance) -> 'Draft':
        pages = list(self.page_instances)
        pages[index] = page
        return replace(self, page_instances=tuple(pages))

    def with_pages(self, pages) -> 'Draft':
        return replace(self, page_instances=tuple(pages))

    def with_payload(self, **updates) -> 'Draft':
        payload = dict(self.payload)
        payload.update(updates)
        return replace(self, payload=payload)

    def with_meta(self, **updates) -> 'Draft':
        meta = dict(self.meta)
        meta.update(updates)
        return self.with_payload(meta=meta)

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self):
        out = {
            'id': self.id,
            'title': self.title,
            'templateId': self.template_id,
            'media': list(self.media),
            'pageInstances': [p.to_dict() for p in self.page_instances],
            'payload': dict(self.payload),
            'status': self.status,
        }
        if self.created_at:
            out['createdAt'] = self.created_at
        if self.updated_at:
            out['updatedAt'] = self.updated_at
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Draft':
        """Build a Draft from a store record.

        Accepts both camelCase and snake_case timestamps. Page blocks are
        parsed, clamped and z-normalized; unknown block types are dropped.
        """
        data = data or {}
        raw_pages = data.get('pageInstances') if isinstance(data.get('pageInstances'), list) else []
        payload = data.get('payload') if isinstance(data.get('payload'), dict) else {}
        media = data.get('media') if isinstance(data.get('media'), list) else []
        return cls(
            id=str(data.get('id') or ''),
            title=str(data.get('title') or ''),
            template_id=data.get('templateId') or None,
            media=list(media),
            page_instances=tuple(PageInstance.from_dict(p) for p in raw_pages if isinstance(p, dict)),
            payload=dict(payload),
            status=str(data.get('status') or 'draft'),
            created_at=data.get('createdAt') or data.get('created_at'),
            updated_at=data.get('updatedAt') or data.get('updated_at'),
        )
