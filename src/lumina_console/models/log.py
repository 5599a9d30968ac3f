"""
Request log models — GET /request-logs/page and GET /request-logs/{id}.
"""

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

STATUS_SUCCESS = "SUCCESS"
STATUS_FAIL = "FAIL"


class RequestLog(BaseModel):
    """One row of the request log table."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    request_time: int = 0               # epoch seconds
    request_model_name: Optional[str] = None
    actual_model_name: Optional[str] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    first_token_ms: Optional[int] = None
    retry_count: Optional[int] = None
    status: str = ""                    # "SUCCESS" | "FAIL"
    cost: Optional[float] = None
    provider_name: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> str:
        # Snowflake ids overflow JS-style number handling upstream; keep them opaque.
        return str(value)

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_SUCCESS

    @property
    def total_tokens(self) -> int:
        return (self.input_tokens or 0) + (self.output_tokens or 0)

    @property
    def requested_at(self) -> datetime:
        return datetime.fromtimestamp(self.request_time)


class RequestLogDetail(RequestLog):
    """Full log entry shown in the detail view."""

    request_id: Optional[str] = None
    request_type: Optional[str] = None
    provider_id: Optional[int] = None
    is_stream: bool = False
    first_token_time: Optional[int] = None
    total_time_ms: Optional[int] = None
    request_content: str = ""
    response_content: Optional[str] = None
    error_message: Optional[str] = None
    created_at: Optional[str] = None

    @property
    def pretty_request(self) -> str:
        return _pretty(self.request_content)

    @property
    def pretty_response(self) -> str:
        return _pretty(self.response_content or "")


def _pretty(content: str) -> str:
    try:
        return json.dumps(json.loads(content), indent=2, ensure_ascii=False)
    except ValueError:
        return content
