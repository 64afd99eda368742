"""
Fetch a marketplace listing page and pull the embedded metadata out of it.

The listing page carries the extension's publication history as a JSON blob
inside the element matched by ``.rhs-content .jiContent``. That location is
defined by the marketplace's markup, not by any published contract, so a
missing node is reported as ``MetadataNodeNotFound`` (layout changed) and kept
separate from ``MetadataParseError`` (node present, content unusable).
"""
from __future__ import annotations

import json
import logging
from html.parser import HTMLParser
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from extupdate.domain.errors import MetadataNodeNotFound, MetadataParseError
from extupdate.domain.models import ExtensionIdentifier
from extupdate.services.marketplace.client import get, item_page_url

logger = logging.getLogger(__name__)

METADATA_SELECTOR = ("rhs-content", "jiContent")
DISPLAY_NAME_SELECTOR = ("ux-item-name",)

# Elements that never have a closing tag and so never become ancestors.
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})


class ClassPathTextParser(HTMLParser):
    """
    Collect the text of the first element matching a descendant class path.

    ``class_path`` is read like a CSS descendant selector made only of class
    names: ``("rhs-content", "jiContent")`` matches ``.rhs-content .jiContent``.
    """

    def __init__(self, class_path: Sequence[str]):
        super().__init__(convert_charrefs=True)
        self.class_path = tuple(class_path)
        self._stack: List[Tuple[str, frozenset]] = []
        self._capture_depth: Optional[int] = None
        self._chunks: List[str] = []
        self.found = False
        self.done = False

    def _matches(self, classes: frozenset) -> bool:
        if self.class_path[-1] not in classes:
            return False
        # Walk the ancestors outward, consuming the path from the right.
        remaining = list(self.class_path[:-1])
        for _, ancestor_classes in reversed(self._stack):
            if not remaining:
                break
            if remaining[-1] in ancestor_classes:
                remaining.pop()
        return not remaining

    def handle_starttag(self, tag, attrs):
        if self.done:
            return
        classes = frozenset((dict(attrs).get("class") or "").split())
        if self._capture_depth is None and self._matches(classes):
            self.found = True
            self._capture_depth = len(self._stack)
            if tag in VOID_ELEMENTS:
                self.done = True
                return
        if tag not in VOID_ELEMENTS:
            self._stack.append((tag, classes))

    def handle_startendtag(self, tag, attrs):
        if self.done:
            return
        classes = frozenset((dict(attrs).get("class") or "").split())
        if self._capture_depth is None and self._matches(classes):
            self.found = True
            self.done = True

    def handle_endtag(self, tag):
        if self.done:
            return
        # Tolerate sloppy markup: close back to the nearest matching open tag.
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index][0] == tag:
                del self._stack[index:]
                break
        else:
            return
        if self._capture_depth is not None and len(self._stack) <= self._capture_depth:
            self.done = True

    def handle_data(self, data):
        if self._capture_depth is not None and not self.done:
            self._chunks.append(data)

    @property
    def text(self) -> Optional[str]:
        if not self.found:
            return None
        return "".join(self._chunks)


def select_text(page_text: str, class_path: Sequence[str]) -> Optional[str]:
    """Return the text of the first element matching ``class_path``, or None."""
    parser = ClassPathTextParser(class_path)
    parser.feed(page_text)
    parser.close()
    return parser.text


def extract_metadata(page_text: str) -> Dict[str, Any]:
    """
    Locate the embedded metadata node and parse its JSON content.

    Raises:
        MetadataNodeNotFound: no ``.rhs-content .jiContent`` element exists.
        MetadataParseError: the node text is not a JSON object.
    """
    selector = " ".join(f".{c}" for c in METADATA_SELECTOR)
    text = select_text(page_text, METADATA_SELECTOR)
    if text is None:
        raise MetadataNodeNotFound(
            f"Metadata node '{selector}' not found in listing page; the page layout may have changed"
        )

    try:
        document = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise MetadataParseError(f"Metadata node '{selector}' does not contain valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MetadataParseError(
            f"Metadata node '{selector}' holds a JSON {type(document).__name__}, expected an object"
        )
    return document


def extract_display_name(page_text: str) -> Optional[str]:
    """Human-friendly extension title from the listing page, if present."""
    text = select_text(page_text, DISPLAY_NAME_SELECTOR)
    if text is None:
        return None
    return " ".join(text.split()) or None


def fetch_listing_page(client: httpx.Client, base_url: str, identifier: ExtensionIdentifier) -> str:
    url = item_page_url(base_url, identifier)
    logger.info(f"Fetching data for extension {identifier}...")
    response = get(client, url)
    return response.text
