"""Login session management on top of the hospital API"""

import logging
from typing import Optional

from pydantic import ValidationError

from api import HospitalAPI
from models import AuthResponse, LoginForm, RegisterForm, User
from session import CredentialPair, SessionRecord

logger = logging.getLogger(__name__)


class AuthService:
    """Logs users in and out and keeps the session store in step"""

    def __init__(self, api: HospitalAPI):
        self.api = api
        self.store = api.store

    def _store_session(self, auth: AuthResponse) -> None:
        self.store.save_session(
            SessionRecord(
                credentials=CredentialPair(
                    access_token=auth.tokens.access,
                    refresh_token=auth.tokens.refresh,
                ),
                user=auth.user.model_dump(),
            )
        )
        logger.debug(f"Session stored for {auth.user.username}")

    async def login(self, username: str, password: str) -> AuthResponse:
        """Log in and persist the returned tokens and user

        Raises:
            httpx.HTTPStatusError: Credentials rejected
        """
        logger.info(f"Logging in as {username}")
        auth = await self.api.auth.login(LoginForm(username=username, password=password))
        self._store_session(auth)
        return auth

    async def register(self, form: RegisterForm) -> AuthResponse:
        """Create an account and persist the returned tokens and user"""
        logger.info(f"Registering {form.username}")
        auth = await self.api.auth.register(form)
        self._store_session(auth)
        return auth

    def logout(self) -> None:
        self.store.clear()
        logger.info("Logged out")

    def get_current_user(self) -> Optional[User]:
        data = self.store.get_user()
        if not data:
            return None
        try:
            return User.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed stored user: {e}")
            return None

    def is_authenticated(self) -> bool:
        return self.store.is_authenticated()

    async def get_profile(self) -> User:
        return await self.api.auth.profile()
