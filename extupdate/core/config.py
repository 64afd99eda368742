from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from extupdate.domain.models import CheckerSettings

ENV_PREFIX = "EXTUPDATE_"

_ENV_FIELDS = {
    "MARKETPLACE_URL": "marketplace_url",
    "HTTP_TIMEOUT": "http_timeout",
    "SHOW_METADATA": "show_metadata",
    "OUTPUT_FORMAT": "output_format",
    "LOG_LEVEL": "log_level",
    "USER_AGENT": "user_agent",
}


def get_settings(
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> CheckerSettings:
    """
    Build settings from ``EXTUPDATE_*`` environment variables.

    Keyword overrides (typically from command line flags) win over the
    environment; ``None`` overrides are ignored. Raises pydantic's
    ValidationError for values that don't validate.
    """
    env = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for suffix, field in _ENV_FIELDS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is not None and raw.strip() != "":
            values[field] = raw.strip()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return CheckerSettings(**values)
