"""
User profile REST API.
"""

from typing import Optional

from lumina_console.errors import FetchError
from lumina_console.transport.http import HttpClient


class ProfileAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def update(self, username: str, password: Optional[str] = None,
                     original_password: Optional[str] = None) -> None:
        """PUT /user/profile — changing the password requires the original one."""
        body = {"username": username}
        if password:
            body["password"] = password
            body["originalPassword"] = original_password or ""
        envelope = await self._http.put("/user/profile", body)
        if not envelope.ok:
            raise FetchError(envelope.message or "Failed to update profile", code="profile_error",
                             details={"code": envelope.code})
