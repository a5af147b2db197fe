"""Data models for the persisted login session"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class CredentialPair:
    """Bearer credentials issued by the API

    Attributes:
        access_token: Short-lived token presented on every request
        refresh_token: Longer-lived token exchanged for a new access token
    """
    access_token: str
    refresh_token: str


@dataclass
class SessionRecord:
    """Everything stored for a logged-in user

    Attributes:
        user: User profile as returned by the API
        credentials: Current credential pair
    """
    credentials: CredentialPair
    user: Dict[str, Any] = field(default_factory=dict)
