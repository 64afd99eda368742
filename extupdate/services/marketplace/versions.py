from __future__ import annotations

import logging
from typing import Any, Dict

from extupdate.domain.errors import (
    VersionFieldMissing,
    VersionFieldNotString,
    VersionListEmpty,
    VersionListMissing,
)

logger = logging.getLogger(__name__)

VERSIONS_KEY = "Versions"
VERSION_FIELD = "version"


def resolve_latest_version(document: Dict[str, Any]) -> str:
    """
    Return the most recently published version from listing metadata.

    The marketplace orders ``Versions`` newest first, so the first entry is
    the latest by definition. The version string is opaque; it is never
    parsed or compared other than for equality.
    """
    versions = document.get(VERSIONS_KEY)
    if versions is None:
        raise VersionListMissing(f"Metadata has no '{VERSIONS_KEY}' list")
    if not isinstance(versions, list):
        raise VersionListMissing(
            f"Metadata '{VERSIONS_KEY}' is a {type(versions).__name__}, expected a list"
        )
    if not versions:
        raise VersionListEmpty(f"Metadata '{VERSIONS_KEY}' list is empty")

    latest = versions[0]
    if not isinstance(latest, dict) or VERSION_FIELD not in latest:
        raise VersionFieldMissing(f"First '{VERSIONS_KEY}' entry has no '{VERSION_FIELD}' field")

    version = latest[VERSION_FIELD]
    if not isinstance(version, str):
        raise VersionFieldNotString(
            f"First '{VERSIONS_KEY}' entry has a {type(version).__name__} '{VERSION_FIELD}', expected a string"
        )

    logger.debug(f"Latest of {len(versions)} published versions: {version}")
    return version
