"""Key/value storage slots persisted as files."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageUnavailableError(RuntimeError):
    """Raised when the storage medium cannot be read or written."""


class StorageService:
    """Store string values under fixed keys, one file per key."""

    def __init__(self, storage_dir: Path) -> None:
        self.storage_dir = Path(storage_dir)

    def slot_path(self, key: str) -> Path:
        """Return the file backing ``key``."""
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key '{key}'")
        return self.storage_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the slot is absent."""
        path = self.slot_path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageUnavailableError(f"Cannot read storage slot '{key}': {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""
        path = self.slot_path(key)
        tmp_name: Optional[str] = None
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            # 先写临时文件再替换，避免写到一半的 JSON
            fd, tmp_name = tempfile.mkstemp(dir=self.storage_dir, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                fp.write(value)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write storage slot '{key}': {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug("Temporary file %s already gone", tmp_name)

    def remove_item(self, key: str) -> None:
        """Delete the slot; a missing slot is not an error."""
        path = self.slot_path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot remove storage slot '{key}': {exc}") from exc
