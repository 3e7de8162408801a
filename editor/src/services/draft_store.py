"""
Drone Report Editor - Draft Store Service

Remote draft storage contract and two local implementations:
- InMemoryDraftStore: dict-backed, used headless and in tests
- JsonFileDraftStore: one <id>.json file per draft

The editor only ever calls get_draft() and update_draft(). Writes are
last-write-wins; there is no versioning.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path


class DraftStoreError(Exception):
    """Base class for draft storage faults."""


class DraftNotFoundError(DraftStoreError):
    """No draft with the requested id."""


def _stamp():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class DraftStore(ABC):
    """Draft storage contract."""

    @abstractmethod
    def get_draft(self, draft_id: str) -> dict:
        """Fetch a draft record.

        Raises:
            DraftNotFoundError: If the draft does not exist
        """

    @abstractmethod
    def update_draft(self, draft_id: str, body: dict) -> None:
        """Merge a serialized body into the stored draft.

        Args:
            body: Subset with pageInstances, media, payload, templateId, title

        Raises:
            DraftStoreError: On any storage fault
        """


class InMemoryDraftStore(DraftStore):
    """Dict-backed draft store."""

    def __init__(self, drafts=None):
        self._drafts = {}
        self._logger = logging.getLogger('InMemoryDraftStore')
        for record in drafts or []:
            self.put(record)

    def put(self, record: dict):
        self._drafts[record['id']] = copy.deepcopy(record)

    def get_draft(self, draft_id):
        if draft_id not in self._drafts:
            raise DraftNotFoundError(f"Draft '{draft_id}' not found")
        return copy.deepcopy(self._drafts[draft_id])

    def update_draft(self, draft_id, body):
        if draft_id not in self._drafts:
            raise DraftNotFoundError(f"Draft '{draft_id}' not found")
        record = self._drafts[draft_id]
        record.update(copy.deepcopy(body))
        record['updatedAt'] = _stamp()
        self._logger.debug(f"Updated draft {draft_id} ({', '.join(sorted(body))})")


class JsonFileDraftStore(DraftStore):
    """One JSON file per draft in a directory."""

    def __init__(self, directory):
        self.directory = Path(directory)
        self._logger = logging.getLogger('JsonFileDraftStore')

    def _path(self, draft_id):
        return self.directory / f"{draft_id}.json"

    def get_draft(self, draft_id):
        path = self._path(draft_id)
        if not path.exists():
            raise DraftNotFoundError(f"Draft '{draft_id}' not found in {self.directory}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DraftStoreError(f"Failed to read draft '{draft_id}': {e}") from e

    def update_draft(self, draft_id, body):
        record = self.get_draft(draft_id)
        record.update(body)
        record['updatedAt'] = _stamp()
        path = self._path(draft_id)
        tmp_path = path.with_suffix('.json.tmp')
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(record, f, indent=2, ensure_ascii=False)
            tmp_path.replace(path)
        except OSError as e:
            raise DraftStoreError(f"Failed to write draft '{draft_id}': {e}") from e
        self._logger.debug(f"Draft saved to {path}")

    def create_draft(self, record: dict):
        """Write a new draft record (used to seed a directory)."""
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(record['id']), 'w', encoding='utf-8') as f:
            json.dump(record, f, indent=2, ensure_ascii=False)
