"""
Drone Report Editor - Template Loader Service

Read-only template lookup. Unknown ids return None; malformed template JSON
degrades to a template with no pages rather than raising.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from models.template import Template


class TemplateLoader(ABC):
    """Template lookup contract."""

    @abstractmethod
    def load_template(self, template_id: str) -> Optional[Template]:
        """Return the template, or None if unknown."""


class InMemoryTemplateLoader(TemplateLoader):
    """Templates from dicts keyed by id."""

    def __init__(self, templates=None):
        self._templates = {}
        for data in templates or []:
            self._templates[data.get('id')] = data

    def load_template(self, template_id):
        data = self._templates.get(template_id)
        return Template.from_dict(data) if data is not None else None


class DirectoryTemplateLoader(TemplateLoader):
    """Templates from <directory>/<id>.json files, cached after first load."""

    def __init__(self, directory):
        self.directory = Path(directory)
        self._cache = {}
        self._logger = logging.getLogger('DirectoryTemplateLoader')

    def load_template(self, template_id):
        if not template_id:
            return None
        if template_id in self._cache:
            return self._cache[template_id]

        path = self.directory / f"{template_id}.json"
        if not path.exists():
            self._logger.warning(f"Template not found: {path}")
            return None

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self._logger.warning(f"Malformed template {path}: {e}")
            data = {'id': template_id}

        template = Template.from_dict(data)
        self._cache[template_id] = template
        return template
