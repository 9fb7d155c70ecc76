# /random_caller/services/database_helpers/storage_repository_file.py

"""
File-backed key/value repository used for local, single-user installs.

Each key is stored as its own `<key>.json` file inside the data directory.
Writes go to a temporary sibling first and are then swapped into place with
`os.replace`, so a reader never observes a half-written document.
"""

import logging
import os
import re
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageRepositoryFile:
    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        os.makedirs(self.data_dir, exist_ok=True)

    def _path_for(self, key: str) -> str:
        if not _SAFE_KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return os.path.join(self.data_dir, f"{key}.json")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read storage file %s: %s", path, e)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def close(self) -> None:
        pass
