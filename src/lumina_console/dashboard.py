"""
Dashboard statistics REST API.

The dashboard degrades to empty figures rather than failing: a zeroed
overview and empty series are returned when the backend says no.
"""

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from lumina_console.models.dashboard import DashboardOverview, ModelTokenUsage, ProviderStats, TrafficPoint
from lumina_console.transport.http import HttpClient

logger = logging.getLogger(__name__)


class DashboardAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def overview(self) -> DashboardOverview:
        data = await self._data("/dashboard/overview")
        if not isinstance(data, dict):
            return DashboardOverview()
        try:
            return DashboardOverview.model_validate(data)
        except ValidationError as e:
            logger.warning("Ignoring malformed dashboard overview: %s", e)
            return DashboardOverview()

    async def traffic(self) -> list[TrafficPoint]:
        return await self._series("/dashboard/traffic", list[TrafficPoint])

    async def model_token_usage(self) -> list[ModelTokenUsage]:
        return await self._series("/dashboard/model-token-usage", list[ModelTokenUsage])

    async def provider_stats(self) -> list[ProviderStats]:
        return await self._series("/dashboard/provider-stats", list[ProviderStats])

    async def _data(self, path: str) -> Any:
        envelope = await self._http.get(path)
        if not envelope.ok:
            logger.warning("GET %s returned %s: %s", path, envelope.code, envelope.message)
            return None
        return envelope.data

    async def _series(self, path: str, shape: Any) -> list[Any]:
        data = await self._data(path)
        if not isinstance(data, list):
            return []
        try:
            return TypeAdapter(shape).validate_python(data)
        except ValidationError as e:
            logger.warning("Ignoring malformed %s: %s", path, e)
            return []
