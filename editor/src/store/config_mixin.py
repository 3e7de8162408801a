"""Configuration management for the editor store"""

import os
import json
from dataclasses import dataclass, fields

from utils.logger import loggerRaise
from constants import (
	HISTORY_LIMIT, MARK_COALESCE_MS, SAVE_DEBOUNCE_MS, CONFIG_DIR_NAME, CONFIG_FILE_NAME
)


@dataclass
class EditorConfig:
	"""Tunable limits and timings, overriding the constants defaults"""
	history_limit: int = HISTORY_LIMIT
	mark_coalesce_ms: int = MARK_COALESCE_MS
	save_debounce_ms: int = SAVE_DEBOUNCE_MS

	@classmethod
	def from_dict(cls, data):
		known = {f.name for f in fields(cls)}
		return cls(**{k: int(v) for k, v in (data or {}).items() if k in known})


def default_config_file():
	return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, CONFIG_FILE_NAME)


class ConfigMixin:
	"""Configuration file loading"""

	def _load_config(self, config_file=None):
		"""Load settings from the config file

		A missing file yields defaults. A malformed file is reported and raised.

		Returns:
			EditorConfig
		"""
		self.config_file = config_file or default_config_file()
		try:
			if os.path.exists(self.config_file):
				with open(self.config_file, 'r', encoding='utf-8') as f:
					return EditorConfig.from_dict(json.load(f))
		except Exception as e:
			loggerRaise(e, "Error loading config")
		return EditorConfig()
