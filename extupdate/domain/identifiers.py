from pydantic import ValidationError

from extupdate.domain.errors import MalformedIdentifier
from extupdate.domain.models import ExtensionIdentifier

SEPARATOR = "."


def parse_extension_id(raw: str) -> ExtensionIdentifier:
    """
    Split ``publisher.name`` on the first separator.

    Everything after the first ``.`` belongs to the name, so
    ``ms-python.python.debug`` yields publisher ``ms-python``.
    """
    value = raw or ""
    publisher, sep, name = value.partition(SEPARATOR)
    if not sep:
        raise MalformedIdentifier(
            f"Invalid extension id {raw!r}: expected 'publisher{SEPARATOR}name'"
        )
    try:
        return ExtensionIdentifier(publisher=publisher, name=name)
    except ValidationError as e:
        raise MalformedIdentifier(
            f"Invalid extension id {raw!r}: publisher and name must both be non-empty"
        ) from e
