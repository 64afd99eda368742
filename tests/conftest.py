import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"

MARKETPLACE_URL = "https://marketplace.test"


def listing_page(document: object, display_name: Optional[str] = "Java") -> str:
    """Minimal listing page embedding ``document`` at the metadata location."""
    body = document if isinstance(document, str) else json.dumps(document)
    title = f'<h1 class="ux-item-name">{display_name}</h1>' if display_name else ""
    return (
        "<html><body>"
        f"{title}"
        '<div class="rhs-content"><div class="inner">'
        f'<script class="jiContent" type="application/json">{body}</script>'
        "</div></div>"
        "</body></html>"
    )


class FakeMarketplace:
    """httpx transport that serves canned listing pages and packages."""

    def __init__(self, pages: Optional[Dict[str, str]] = None, packages: Optional[Dict[str, bytes]] = None):
        self.pages = pages or {}
        self.packages = packages or {}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/items":
            item_name = request.url.params.get("itemName")
            if item_name in self.pages:
                return httpx.Response(200, text=self.pages[item_name])
            return httpx.Response(404, text="Not Found")
        if request.url.path.endswith("/vspackage"):
            if request.url.path in self.packages:
                return httpx.Response(200, content=self.packages[request.url.path])
            return httpx.Response(404)
        return httpx.Response(400)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def package_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/vspackage")]


def package_path(publisher: str, name: str, version: str) -> str:
    return f"/_apis/public/gallery/publishers/{publisher}/vsextensions/{name}/{version}/vspackage"


@pytest.fixture
def fixture_text():
    def _read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(logging.NOTSET)
