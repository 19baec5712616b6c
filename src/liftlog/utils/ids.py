"""Identifier helpers."""

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(length: int = 13) -> str:
    """Generate a random base-36 identifier for locally created entities."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def temp_id() -> str:
    """Placeholder id for an entity awaiting its server-assigned id."""
    return f"temp-{time.time_ns() // 1_000_000}-{generate_id(4)}"
