"""
Request logs REST API.
"""

from typing import Any

from pydantic import ValidationError

from lumina_console.errors import FetchError
from lumina_console.models.envelope import ApiEnvelope
from lumina_console.models.log import RequestLog, RequestLogDetail
from lumina_console.models.page import Page
from lumina_console.transport.http import HttpClient


class RequestLogsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def page(self, current: int = 1, size: int = 10) -> Page[RequestLog]:
        """GET /request-logs/page"""
        envelope = await self._http.get("/request-logs/page", params={"current": current, "size": size})
        return _decode(envelope, Page[RequestLog], "Failed to load request logs")

    async def get(self, log_id: str) -> RequestLogDetail:
        """GET /request-logs/{id}"""
        envelope = await self._http.get(f"/request-logs/{log_id}")
        return _decode(envelope, RequestLogDetail, "Failed to load log details")


def _decode(envelope: ApiEnvelope, model: Any, fallback: str) -> Any:
    if not envelope.ok or envelope.data is None:
        raise FetchError(envelope.message or fallback, details={"code": envelope.code})
    try:
        return model.model_validate(envelope.data)
    except ValidationError as e:
        raise FetchError(f"{fallback}: {e.error_count()} invalid field(s)", code="invalid_payload",
                         details={"errors": e.errors(include_url=False)})
