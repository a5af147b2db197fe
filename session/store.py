"""Session store abstraction

The store is a small key-value interface over three fixed slots. The HTTP
client reads and writes tokens only through it, so tests can hand it an
in-memory store and the CLI a file-backed one.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .jwt_utils import describe_expiry
from .models import CredentialPair, SessionRecord

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_KEY = "user"

SESSION_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY)


class SessionStore(ABC):
    """Key-value store for the access_token, refresh_token and user slots"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None"""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key"""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key if present"""

    def clear(self) -> None:
        """Remove every session slot"""
        for key in SESSION_KEYS:
            self.remove(key)
        logger.debug("Session store cleared")

    def get_access_token(self) -> Optional[str]:
        return self.get(ACCESS_TOKEN_KEY)

    def set_access_token(self, access_token: str) -> None:
        self.set(ACCESS_TOKEN_KEY, access_token)

    def get_refresh_token(self) -> Optional[str]:
        return self.get(REFRESH_TOKEN_KEY)

    def get_user(self) -> Optional[Dict[str, Any]]:
        """Decode the stored user profile

        Returns:
            User dictionary, or None if absent or not valid JSON
        """
        raw = self.get(USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored user profile is not valid JSON")
            return None

    def save_session(self, record: SessionRecord) -> None:
        """Persist a full session after login or registration"""
        self.set(ACCESS_TOKEN_KEY, record.credentials.access_token)
        self.set(REFRESH_TOKEN_KEY, record.credentials.refresh_token)
        self.set(USER_KEY, json.dumps(record.user))

    def load_session(self) -> Optional[SessionRecord]:
        """Rebuild the session record, or None if no tokens are stored"""
        access_token = self.get_access_token()
        refresh_token = self.get_refresh_token()
        if not access_token or not refresh_token:
            return None
        return SessionRecord(
            credentials=CredentialPair(access_token=access_token, refresh_token=refresh_token),
            user=self.get_user() or {},
        )

    def is_authenticated(self) -> bool:
        return bool(self.get_access_token())

    def get_status(self) -> Dict[str, Any]:
        """Get session status without exposing secrets"""
        access_token = self.get_access_token()
        user = self.get_user() or {}
        return {
            "has_access_token": bool(access_token),
            "has_refresh_token": bool(self.get_refresh_token()),
            "username": user.get("username"),
            "access_expiry": describe_expiry(access_token) if access_token else None,
        }


class MemorySessionStore(SessionStore):
    """Session store held in a plain dictionary"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data
