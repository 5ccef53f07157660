"""
Local key/value storage.

The storefront keeps exactly two client-local values between runs: the bearer
token and the theme preference. They live in a single JSON file mapping string
keys to string values. There is no TTL, no encryption and no coordination
between processes: the last write wins.

The file belongs to the server, not to a browser. Every Streamlit session
using the same path reads and writes the same token, so the app serves one
user per storage path.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

TOKEN_KEY = "access_token"
THEME_KEY = "theme"


class LocalStorage:
    """
    String key/value store persisted to a JSON file.

    Every read goes back to the file so that a value written by another
    process is picked up; every write rewrites the whole file.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Local storage at %s is unreadable, treating as empty: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage at %s is not a JSON object, treating as empty", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        logger.debug("Local storage: set %s", key)

    def remove_item(self, key: str) -> None:
        """Remove a key. Removing a missing key is a no-op."""
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
            logger.debug("Local storage: removed %s", key)
