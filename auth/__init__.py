"""Authentication helpers for the hospital admin client"""

from .service import AuthService

__all__ = [
    "AuthService",
]
