"""
Error taxonomy for the extension update check.

Every failure aborts the whole check. Each error records the pipeline stage
that raised it so an operator can tell a changed marketplace page layout
(extraction errors) apart from malformed metadata content or network trouble.
"""
from __future__ import annotations

from typing import Optional


class ExtensionUpdateError(Exception):
    """Base class for all errors raised while checking an extension."""

    stage: str = "check"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    @property
    def kind(self) -> str:
        return type(self).__name__


class MalformedIdentifier(ExtensionUpdateError):
    stage = "parse"


class NetworkFailure(ExtensionUpdateError):
    """An HTTP request failed at the transport or status level."""

    stage = "page"

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        stage: Optional[str] = None,
    ):
        super().__init__(message, stage)
        self.url = url
        self.status_code = status_code


class ArtifactUnavailable(NetworkFailure):
    stage = "artifact"


# ---------------------------------------------------------------------------
# Listing page extraction
# ---------------------------------------------------------------------------


class MetadataExtractionError(ExtensionUpdateError):
    stage = "extract"


class MetadataNodeNotFound(MetadataExtractionError):
    """The embedded metadata node is missing; the page layout has likely changed."""


class MetadataParseError(MetadataExtractionError):
    """The metadata node was found but its text is not a JSON object."""


# ---------------------------------------------------------------------------
# Metadata content
# ---------------------------------------------------------------------------


class MetadataContentError(ExtensionUpdateError):
    stage = "resolve"


class VersionListMissing(MetadataContentError):
    pass


class VersionListEmpty(MetadataContentError):
    pass


class VersionFieldMissing(MetadataContentError):
    pass


class VersionFieldNotString(MetadataContentError):
    pass
