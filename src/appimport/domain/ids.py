"""Prefixed unique identifiers for newly created records."""

from __future__ import annotations

import uuid
from typing import Final

_ALPHABET: Final[str] = "0123456789abcdefghijklmnopqrstuvwxyz"
ID_LENGTH: Final[int] = 14


def _base36(value: int) -> str:
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits)) or "0"


def generate_id(prefix: str) -> str:
    """Return ``prefix`` followed by a random base36 suffix, e.g. ``app-4zv7lmnoqw4o2k``."""

    suffix = _base36(uuid.uuid4().int)[-ID_LENGTH:]
    return f"{prefix}{suffix.rjust(ID_LENGTH, '0')}"
