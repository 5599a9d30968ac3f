"""
Paginated list payload — GET /request-logs/page.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

RecordT = TypeVar("RecordT")


class Page(BaseModel, Generic[RecordT]):
    records: list[RecordT] = []
    total: int = 0
    size: int = 0
    current: int = 1
    pages: int = 0
