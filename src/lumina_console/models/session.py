"""
Session models — login response and the client-side session.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class LoginResult(BaseModel):
    """POST /auth/login payload.data"""
    model_config = ConfigDict(populate_by_name=True)

    token: str
    expires_in: Optional[int] = Field(default=None, alias="expiresIn")
    username: str


class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    credential: Optional[str] = None
    principal: Optional[str] = None
    # Only known right after login; restored sessions leave it unset and
    # expiry is enforced by the server.
    expires_in: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.credential is not None
