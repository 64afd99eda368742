"""
Download a published extension package (.vsix) from the marketplace.
"""
from __future__ import annotations

import logging

import httpx

from extupdate.domain.errors import ArtifactUnavailable
from extupdate.domain.models import ExtensionIdentifier
from extupdate.services.marketplace.client import get, vspackage_url

logger = logging.getLogger(__name__)

VSIX_FILENAME = "{item_name}-{version}.vsix"


def vsix_filename(identifier: ExtensionIdentifier, version: str) -> str:
    return VSIX_FILENAME.format(item_name=identifier.item_name, version=version)


def fetch_artifact(
    client: httpx.Client,
    base_url: str,
    identifier: ExtensionIdentifier,
    version: str,
) -> bytes:
    """
    Fetch the raw package bytes for one version. Single attempt, no retry.

    Raises:
        ArtifactUnavailable: on transport errors, non-2xx responses or a
            truncated body.
    """
    url = vspackage_url(base_url, identifier, version)
    logger.info(f"Downloading {vsix_filename(identifier, version)}...")
    response = get(client, url, error_cls=ArtifactUnavailable)
    content = response.content
    logger.debug(f"Downloaded {len(content)} bytes from {url}")
    return content
