"""
Decide whether a check produced an update and render the update record.
"""
from __future__ import annotations

import json
from typing import Callable, Dict, Optional

import yaml

from extupdate.domain.models import ExtensionIdentifier, UpdateRecord


def report_update(
    identifier: ExtensionIdentifier,
    latest: str,
    digest: str,
    baseline: Optional[str] = None,
    display_name: Optional[str] = None,
) -> Optional[UpdateRecord]:
    """
    Return an UpdateRecord when ``latest`` differs from ``baseline``.

    A missing baseline is treated as equal to ``latest``: the first check of
    an extension never reports an update.
    """
    current = baseline if baseline is not None else latest
    if current == latest:
        return None
    return UpdateRecord(
        publisher=identifier.publisher,
        name=identifier.name,
        version=latest,
        sha256=digest,
        display_name=display_name,
    )


NIX_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def nix_string(value: str) -> str:
    """Quote ``value`` as a nix string literal; ``${`` must not start interpolation."""
    escaped = "".join(NIX_ESCAPES.get(ch, ch) for ch in value)
    return '"' + escaped.replace("${", "\\${") + '"'


def render_nix(record: UpdateRecord) -> str:
    fields = " ".join(f"{key} = {nix_string(value)};" for key, value in record.record_fields().items())
    line = f"{{ {fields} }}"
    if record.display_name:
        line += " # " + " ".join(record.display_name.split())
    return line


def render_json(record: UpdateRecord) -> str:
    return json.dumps(record.record_fields())


def render_yaml(record: UpdateRecord) -> str:
    return yaml.safe_dump(
        record.record_fields(),
        default_flow_style=True,
        sort_keys=False,
        width=float("inf"),
    ).strip()


RENDERERS: Dict[str, Callable[[UpdateRecord], str]] = {
    "nix": render_nix,
    "json": render_json,
    "yaml": render_yaml,
}


def render_record(record: UpdateRecord, fmt: str = "nix") -> str:
    try:
        renderer = RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown output format {fmt!r}; expected one of {', '.join(RENDERERS)}")
    return renderer(record)
