"""
Check one marketplace extension for a newer published version.

The check runs as a single linear sequence:
- parse the extension id
- fetch the listing page and extract its embedded metadata
- resolve the latest version
- download that version's package and hash it
- compare against the caller's baseline

Any failure aborts the remaining steps; no partial result is produced.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Callable, Dict, Optional, TextIO

import httpx

from extupdate.domain.identifiers import parse_extension_id
from extupdate.domain.models import CheckResult, CheckerSettings
from extupdate.services.hashing import content_digest
from extupdate.services.marketplace.artifacts import fetch_artifact
from extupdate.services.marketplace.client import create_client
from extupdate.services.marketplace.page import (
    extract_display_name,
    extract_metadata,
    fetch_listing_page,
)
from extupdate.services.marketplace.versions import resolve_latest_version
from extupdate.services.reporter import report_update

logger = logging.getLogger(__name__)

MetadataHook = Callable[[Dict[str, Any], str], None]


def print_metadata(stream: TextIO) -> MetadataHook:
    """Build a hook that dumps the parsed metadata and latest version to ``stream``."""

    def _hook(document: Dict[str, Any], latest: str) -> None:
        print(json.dumps(document, indent=2, sort_keys=True), file=stream)
        print(f"latest version: {latest}", file=stream)

    return _hook


class UpdateChecker:
    """Runs the update check pipeline for a single extension."""

    def __init__(
        self,
        settings: Optional[CheckerSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        on_metadata: Optional[MetadataHook] = None,
    ):
        self.settings = settings or CheckerSettings()
        self.transport = transport
        if on_metadata is None and self.settings.show_metadata:
            on_metadata = print_metadata(sys.stderr)
        self.on_metadata = on_metadata

    def check(self, raw_id: str, baseline: Optional[str] = None) -> CheckResult:
        identifier = parse_extension_id(raw_id)
        base_url = self.settings.marketplace_url

        with create_client(self.settings, self.transport) as client:
            page_text = fetch_listing_page(client, base_url, identifier)
            document = extract_metadata(page_text)
            display_name = extract_display_name(page_text)
            latest = resolve_latest_version(document)

            if self.on_metadata is not None:
                self.on_metadata(document, latest)

            artifact = fetch_artifact(client, base_url, identifier, latest)

        sha256 = content_digest(artifact)
        update = report_update(identifier, latest, sha256, baseline, display_name)

        if update is None:
            logger.info(f"{identifier} is up to date at {latest}")
        else:
            logger.info(f"{identifier} has an update: {baseline} -> {latest}")

        return CheckResult(
            identifier=identifier,
            latest_version=latest,
            sha256=sha256,
            baseline=baseline,
            display_name=display_name,
            update=update,
        )
