"""Structural pre-pass: drop identifying keys from JSON-like payloads."""

from __future__ import annotations
from typing import Any

BANNED_KEYS: frozenset[str] = frozenset({
    "name",
    "fullName",
    "firstName",
    "lastName",
    "dob",
    "dateOfBirth",
    "mrn",
    "ssn",
    "address",
    "phone",
    "email",
    "accountNumber",
})


def scrub_fields(obj: Any, banned: frozenset[str] = BANNED_KEYS) -> Any:
    """Return a copy of obj with every banned key removed, at any depth.

    Values are dropped, not redacted in place.  Scalars pass through.
    """
    if isinstance(obj, dict):
        return {
            k: scrub_fields(v, banned)
            for k, v in obj.items()
            if k not in banned
        }
    if isinstance(obj, (list, tuple)):
        return [scrub_fields(v, banned) for v in obj]
    return obj
