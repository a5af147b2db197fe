"""File-backed session store"""

import json
import logging
import os
import platform
from pathlib import Path
from typing import Dict, Optional

from settings import SESSION_FILE
from .store import SessionStore

logger = logging.getLogger(__name__)


class FileSessionStore(SessionStore):
    """Persists the session slots as JSON with owner-only permissions"""

    def __init__(self, session_file: Optional[str] = None):
        self.session_path = Path(session_file if session_file else SESSION_FILE).expanduser()
        self._ensure_secure_directory()

    def _ensure_secure_directory(self):
        """Create parent directory with secure permissions"""
        parent_dir = self.session_path.parent
        if not parent_dir.exists():
            parent_dir.mkdir(parents=True, exist_ok=True)
            # Set directory permissions to 700 on Unix-like systems
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)

    def _read(self) -> Dict[str, str]:
        if not self.session_path.exists():
            return {}
        try:
            data = json.loads(self.session_path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Failed to load session file {self.session_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed session file {self.session_path}")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        if not data:
            if self.session_path.exists():
                self.session_path.unlink()
                logger.debug(f"Removed session file {self.session_path}")
            return

        self._ensure_secure_directory()
        self.session_path.write_text(json.dumps(data, indent=2))
        # Set file permissions to 600 on Unix-like systems
        if platform.system() != "Windows":
            os.chmod(self.session_path, 0o600)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    @property
    def session_file(self) -> Path:
        """Get the session file path"""
        return self.session_path
