"""
HTTP plumbing shared by the marketplace page and package fetchers.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from extupdate import __version__
from extupdate.domain.errors import NetworkFailure
from extupdate.domain.models import CheckerSettings, ExtensionIdentifier

logger = logging.getLogger(__name__)

ITEM_PAGE_PATH = "/items"
VSPACKAGE_PATH = "/_apis/public/gallery/publishers/{publisher}/vsextensions/{name}/{version}/vspackage"


def item_page_url(base_url: str, identifier: ExtensionIdentifier) -> str:
    return f"{base_url.rstrip('/')}{ITEM_PAGE_PATH}?itemName={identifier.item_name}"


def vspackage_url(base_url: str, identifier: ExtensionIdentifier, version: str) -> str:
    path = VSPACKAGE_PATH.format(
        publisher=identifier.publisher,
        name=identifier.name,
        version=version,
    )
    return f"{base_url.rstrip('/')}{path}"


def create_client(
    settings: CheckerSettings,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """
    Build the client used for both marketplace requests.

    The timeout is only passed through when configured; httpx treats an
    explicit ``None`` as "no timeout" rather than "use the default".
    """
    kwargs = {
        "follow_redirects": True,
        "headers": {"User-Agent": settings.user_agent or f"extupdate/{__version__}"},
    }
    if settings.http_timeout is not None:
        kwargs["timeout"] = settings.http_timeout
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.Client(**kwargs)


def get(
    client: httpx.Client,
    url: str,
    error_cls: type[NetworkFailure] = NetworkFailure,
) -> httpx.Response:
    """
    Perform a single GET and return the fully read response.

    Transport errors, non-2xx statuses and truncated bodies all surface as
    ``error_cls``. There is no retry.
    """
    logger.debug(f"GET {url}")
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise error_cls(
            f"GET {url} failed with HTTP {status} {e.response.reason_phrase}".rstrip(),
            url=url,
            status_code=status,
        ) from e
    except httpx.HTTPError as e:
        raise error_cls(f"GET {url} failed: {e}", url=url) from e
    return response
