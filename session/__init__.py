"""Session persistence for the hospital admin client"""

from .models import CredentialPair, SessionRecord
from .store import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    USER_KEY,
    SESSION_KEYS,
    SessionStore,
    MemorySessionStore,
)
from .file_store import FileSessionStore
from .jwt_utils import parse_jwt_claims, describe_expiry

__all__ = [
    "CredentialPair",
    "SessionRecord",
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "USER_KEY",
    "SESSION_KEYS",
    "SessionStore",
    "MemorySessionStore",
    "FileSessionStore",
    "parse_jwt_claims",
    "describe_expiry",
]
