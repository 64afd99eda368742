import base64
import hashlib

DIGEST_SIZE = hashlib.sha256().digest_size


def content_digest(data: bytes) -> str:
    """SHA-256 of ``data`` as standard padded base64 (44 characters)."""
    digest = hashlib.sha256(data).digest()
    return base64.b64encode(digest).decode("ascii")
