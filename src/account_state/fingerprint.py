"""Deterministic fingerprints over unordered collections of names."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable


def sha256_text(text: str) -> str:
    """Return deterministic SHA-256 digest for a text value."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def feature_fingerprint(names: Iterable[str]) -> str:
    """Return a stable SHA-256 digest for a set of feature names.

    Duplicates are ignored and names are sorted by UTF-8 byte order, so the
    digest does not depend on the order the names were returned in. Each name
    is NUL-terminated before hashing to keep concatenations distinct.
    """
    encoded: set[bytes] = set()
    for name in names:
        if "\x00" in name:
            raise ValueError(f"feature name must not contain NUL characters: {name!r}")
        encoded.add(name.encode("utf-8"))

    digest = hashlib.sha256()
    for item in sorted(encoded):
        digest.update(item)
        digest.update(b"\x00")
    return digest.hexdigest()
