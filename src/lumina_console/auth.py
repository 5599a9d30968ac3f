"""
Session store — owns the authenticated state and its persisted credential.

`login` and `logout` are the only mutators. The store is constructed
explicitly and handed to whichever component needs to gate on it.
"""

import asyncio
import logging

from pydantic import ValidationError

from lumina_console.errors import AuthError, LuminaError
from lumina_console.models.session import LoginResult, Session
from lumina_console.storage import ConfigStorage
from lumina_console.transport.http import HttpClient

logger = logging.getLogger(__name__)

DEFAULT_LOGOUT_TIMEOUT_S = 5.0


class SessionStore:
    def __init__(self, http: HttpClient, storage: ConfigStorage,
                 logout_timeout: float = DEFAULT_LOGOUT_TIMEOUT_S):
        self._http = http
        self._storage = storage
        self._logout_timeout = logout_timeout
        self._session = Session()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    def restore(self) -> Session:
        """Hydrate from storage. A credential without a principal (or vice versa) counts as logged out."""
        credential, principal = self._storage.read_credentials()
        if credential and principal:
            self._set(Session(credential=credential, principal=principal))
        else:
            self._set(Session())
        return self._session

    async def login(self, username: str, password: str) -> Session:
        """POST /auth/login without any stored credential attached."""
        try:
            envelope = await self._http.post(
                "/auth/login", {"username": username, "password": password}, authenticated=False,
            )
        except LuminaError as e:
            logger.warning("Login transport failure: %s", e)
            raise AuthError(f"Login failed: {e}")
        if not envelope.ok:
            logger.warning("Login rejected (%s): %s", envelope.code, envelope.message)
            raise AuthError(envelope.message or "Login failed", code="login_rejected")
        try:
            result = LoginResult.model_validate(envelope.data)
        except ValidationError as e:
            raise AuthError(f"Unexpected login response: {e}")

        self._storage.write_credentials(result.token, result.username)
        self._set(Session(credential=result.token, principal=result.username, expires_in=result.expires_in))
        return self._session

    async def logout(self) -> Session:
        """Best-effort POST /auth/logout; local state is cleared no matter what."""
        try:
            if self._session.is_authenticated:
                await asyncio.wait_for(self._http.post("/auth/logout"), timeout=self._logout_timeout)
            else:
                logger.debug("Logout without an active session, skipping remote call")
        except Exception as e:
            logger.warning("Remote logout failed, clearing local session anyway: %s", e)
        finally:
            self._set(Session())
            try:
                self._storage.clear_credentials()
            except OSError as e:
                logger.error("Could not clear stored credentials in %s: %s", self._storage.path, e)
        return self._session

    def _set(self, session: Session) -> None:
        self._session = session
        self._http.set_token(session.credential)
