"""
Response envelope shared by every Lumina admin endpoint.
"""

from typing import Any, Optional
from pydantic import BaseModel

SUCCESS_CODE = 200


class ApiEnvelope(BaseModel):
    code: int
    message: str = ""
    data: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.code == SUCCESS_CODE
