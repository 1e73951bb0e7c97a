"""Shared fakes for the recipe card test suite.

Nothing here touches the network: the HTTP session and the WebDAV side are
replaced by in-memory doubles passed through constructor arguments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Union

import pytest
import requests

from recipe_cards.config import ScraperConfig
from recipe_cards.errors import StoreError

PAGE_URL = "https://www.example.com/recettes"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def card(href: str, text: str = "Voir la recette") -> str:
    return f'<a href="{href}">{text}</a>'


def recipe_page(*anchors: str, outside: str = "") -> str:
    return (
        "<html><body>"
        f"<nav>{outside}</nav>"
        f'<div data-zest="cards"><ul>{"".join(f"<li>{a}</li>" for a in anchors)}</ul></div>'
        "</body></html>"
    )


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.closed = False

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Answers GET requests from a url -> response (or exception) table."""

    def __init__(self, routes: Dict[str, Union[FakeResponse, Exception]]) -> None:
        self.routes = routes
        self.requested: List[str] = []
        self.timeouts: List[Optional[float]] = []

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.requested.append(url)
        self.timeouts.append(timeout)
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(status_code=404)
        if isinstance(route, Exception):
            raise route
        return route


class MemoryStore:
    """In-memory stand-in for WebDavStore."""

    def __init__(self) -> None:
        self.folders: set = set()
        self.files: Dict[str, bytes] = {}
        self.writes: List[str] = []
        self.fail_writes: set = set()

    def connect(self) -> None:
        pass

    def ensure_directory(self, path: str) -> None:
        self.folders.add(path)

    def exists(self, path: str) -> bool:
        return path in self.files

    def write(self, path: str, data: bytes) -> None:
        if path in self.fail_writes:
            raise StoreError(f"write {path}: 507 Insufficient Storage")
        self.writes.append(path)
        self.files[path] = data


@pytest.fixture
def config() -> ScraperConfig:
    return ScraperConfig(
        page_url=PAGE_URL,
        dav_url="https://cloud.example.com/remote.php/dav/files/me",
        dav_username="me",
        dav_password="secret",
        dav_folder="/Recettes",
        dav_folder_format="%Y-%m-%d",
        timeout=5.0,
    )


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 3, 18, 7, 30)


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("connection reset by peer")
