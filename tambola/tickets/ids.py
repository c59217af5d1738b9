"""Identifier helpers for tickets."""

from __future__ import annotations

import secrets
import string
from typing import Collection, Optional

BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def generate_ticket_id(
    prefix: str = "TKT",
    taken: Optional[Collection[str]] = None,
    length: int = 9,
    max_attempts: int = 32,
) -> str:
    """Return a ticket identifier using base62 random characters.

    When ``taken`` is provided, the helper retries if the generated value is
    already in it, so identifiers stay unique within a batch.
    """

    attempts = 0
    while attempts < max_attempts:
        suffix = "".join(secrets.choice(BASE62_ALPHABET) for _ in range(length))
        candidate = f"{prefix}-{suffix}"

        if taken is not None and candidate in taken:
            attempts += 1
            continue

        return candidate

    raise RuntimeError(
        "Unable to generate a unique ticket identifier after multiple attempts"
    )


__all__ = ["BASE62_ALPHABET", "generate_ticket_id"]
