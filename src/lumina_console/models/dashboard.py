"""
Dashboard models — GET /dashboard/*.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, protected_namespaces=())

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Boxed Java numbers arrive as null when there is no traffic yet
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class DashboardOverview(_CamelModel):
    total_requests: int = 0
    request_growth_rate: float = 0.0   # percent
    total_cost: float = 0.0
    cost_growth_rate: float = 0.0      # percent
    avg_latency: float = 0.0           # ms
    latency_change: float = 0.0        # ms, negative means faster
    success_rate: float = 0.0          # percent
    success_rate_change: float = 0.0   # percent


class TrafficPoint(_CamelModel):
    hour: int               # 0-23
    request_count: int = 0
    timestamp: int = 0


class ModelTokenUsage(_CamelModel):
    model_name: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    request_count: int = 0
    percentage: float = 0.0


class ProviderStats(_CamelModel):
    rank: int
    provider_id: int
    provider_name: str = ""
    call_count: int = 0
    estimated_cost: float = 0.0
    avg_latency: float = 0.0
    success_rate: float = 0.0
