"""Configuration management."""

import json
import logging
from pathlib import Path
from typing import Optional

from ..core.models import InfoOptions

logger = logging.getLogger(__name__)

DEFAULTS = {
    "lang": "en",
    "request_options": {},
    "debug": False,
    "cache_size": 128,
    "max_workers": 4,
    "error_log": None,
}


class Config:
    """Default settings read from a JSON file."""

    def __init__(self, config_file: Optional[Path] = None):
        if config_file is None:
            # Use user's home directory for config
            config_file = Path.home() / "vidinfo_settings.json"
        self.file = Path(config_file)
        self.data = json.loads(json.dumps(DEFAULTS))
        self.load()

    def load(self):
        """Load configuration from file."""
        if not self.file.exists():
            return
        try:
            with open(self.file, 'r', encoding='utf-8') as f:
                self.data.update(json.load(f))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.file, e)

    @property
    def lang(self) -> str:
        return self.data.get("lang") or "en"

    @property
    def cache_size(self) -> int:
        return int(self.data.get("cache_size") or DEFAULTS["cache_size"])

    @property
    def max_workers(self) -> int:
        return int(self.data.get("max_workers") or DEFAULTS["max_workers"])

    @property
    def error_log(self) -> Optional[Path]:
        """Where failures are appended, if anywhere."""
        path = self.data.get("error_log")
        return Path(path).expanduser() if path else None

    def options(self, **overrides) -> InfoOptions:
        """Build request options from the defaults, with overrides applied."""
        values = {
            "lang": self.lang,
            "request_options": dict(self.data.get("request_options") or {}),
            "debug": bool(self.data.get("debug")),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return InfoOptions(**values)
