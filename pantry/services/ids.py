"""Identifier generation for storage areas and items."""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """Return an opaque unique id: epoch millis plus a 7 char base36 suffix."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(7))
    return f"{int(time.time() * 1000)}-{suffix}"
