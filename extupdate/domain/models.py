"""
Pydantic models for the extension update checker.

This module defines the data passed between pipeline stages:
- Extension identity (publisher + name)
- The update record emitted when a newer version is published
- The overall result of a single check
- Runtime settings
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


OutputFormat = Literal["nix", "json", "yaml"]

DEFAULT_MARKETPLACE_URL = "https://marketplace.visualstudio.com"


# ---------------------------------------------------------------------------
# Extension Models
# ---------------------------------------------------------------------------


class ExtensionIdentifier(BaseModel):
    """
    A publisher-qualified extension name, e.g. ``redhat.java``.

    Both parts are required to be non-empty. Instances are immutable.
    """

    model_config = ConfigDict(frozen=True)

    publisher: str = Field(min_length=1, description="Publisher segment of the identifier.")
    name: str = Field(min_length=1, description="Extension name segment of the identifier.")

    @property
    def item_name(self) -> str:
        """The compound ``publisher.name`` form used by the marketplace."""
        return f"{self.publisher}.{self.name}"

    def __str__(self) -> str:
        return self.item_name


class UpdateRecord(BaseModel):
    """
    Describes a newer published version of an extension.

    Only produced when the caller's baseline differs from the latest version.
    ``display_name`` is decoration for renderers and is not part of the
    canonical record fields.
    """

    model_config = ConfigDict(frozen=True)

    publisher: str
    name: str
    version: str
    sha256: str = Field(description="Standard padded base64 SHA-256 of the package.")
    display_name: Optional[str] = Field(default=None, exclude=True)

    def record_fields(self) -> dict:
        return self.model_dump(include={"publisher", "name", "version", "sha256"})


class CheckResult(BaseModel):
    """Outcome of a completed check, whether or not an update was found."""

    identifier: ExtensionIdentifier
    latest_version: str
    sha256: str
    baseline: Optional[str] = None
    display_name: Optional[str] = None
    update: Optional[UpdateRecord] = None

    @property
    def has_update(self) -> bool:
        return self.update is not None


# ---------------------------------------------------------------------------
# Configuration Models
# ---------------------------------------------------------------------------


class CheckerSettings(BaseModel):
    """
    Runtime configuration for the update checker.

    Values come from ``EXTUPDATE_*`` environment variables and can be
    overridden by command line flags.
    """

    marketplace_url: str = Field(
        default=DEFAULT_MARKETPLACE_URL,
        description="Base URL of the extension marketplace.",
    )
    http_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds. Unset means the HTTP client default.",
    )
    show_metadata: bool = Field(
        default=False,
        description="Print the parsed listing metadata to stderr before downloading.",
    )
    output_format: OutputFormat = Field(
        default="nix",
        description="How an update record is rendered on stdout.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level name (DEBUG, INFO, WARNING, ...).",
    )
    user_agent: Optional[str] = Field(
        default=None,
        description="User-Agent header sent with requests. Defaults to extupdate/<version>.",
    )
