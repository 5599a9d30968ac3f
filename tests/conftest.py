"""Shared fixtures: on-disk storage, mocked HTTP and hand-resolved fetchers."""

import asyncio
import json
from typing import Any, Callable, Optional

import httpx
import pytest

from lumina_console.models.log import RequestLog
from lumina_console.models.page import Page
from lumina_console.storage import ConfigStorage
from lumina_console.transport.http import HttpClient

BASE_URL = "http://lumina.test"


@pytest.fixture
def storage(tmp_path):
    return ConfigStorage(tmp_path / "config.json")


def envelope(data: Any = None, code: int = 200, message: str = "success") -> httpx.Response:
    return httpx.Response(200, json={"code": code, "message": message, "data": data})


def make_http(handler: Callable[[httpx.Request], httpx.Response], token: Optional[str] = None) -> HttpClient:
    return HttpClient(base_url=BASE_URL, token=token, transport=httpx.MockTransport(handler))


def make_page(page: int, size: int, total: int, tag: str = "") -> Page[RequestLog]:
    first = (page - 1) * size
    count = max(0, min(size, total - first))
    records = [
        RequestLog(id=f"{tag}{first + i}", request_time=1700000000, status="SUCCESS")
        for i in range(count)
    ]
    pages = -(-total // size) if total else 0
    return Page[RequestLog](records=records, total=total, size=size, current=page, pages=pages)


class FakeFetcher:
    """Records every call and hands back a future the test resolves when it wants to."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.futures: list[asyncio.Future] = []

    async def __call__(self, *args: Any) -> Any:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(args)
        self.futures.append(future)
        return await future

    def resolve(self, index: int, value: Any) -> None:
        self.futures[index].set_result(value)

    def fail(self, index: int, error: Exception) -> None:
        self.futures[index].set_exception(error)


class PageServer:
    """Fetcher that answers immediately from a fixed-size record set."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.calls: list[tuple[int, int]] = []

    async def __call__(self, page: int, size: int) -> Page[RequestLog]:
        self.calls.append((page, size))
        await asyncio.sleep(0)
        return make_page(page, size, self.total)


def read_json(path) -> dict:
    return json.loads(path.read_text())
