"""Composite and derived resource identifiers.

A composite identifier joins an operator-supplied key with a cloud account
UUID as ``<key>:<uuid>``. The UUID is always emitted in canonical lowercase
form and never contains the separator, so decoding splits on the last
separator and keys may themselves contain ``:``.
"""

from __future__ import annotations

import hashlib
import re
from typing import NamedTuple
from uuid import UUID

from account_state.errors import MalformedIdentifier

SEPARATOR = ":"
CANONICAL_UUID_PATTERN = r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$"

_CANONICAL_UUID = re.compile(CANONICAL_UUID_PATTERN)


class CompositeId(NamedTuple):
    key: str
    account_id: UUID


def _check_key(key: object) -> str:
    if not isinstance(key, str) or not key:
        raise MalformedIdentifier("identifier key must be a non-empty string")
    if "\x00" in key:
        raise MalformedIdentifier("identifier key must not contain NUL characters")
    return key


def encode_composite_id(key: str, account_id: UUID) -> str:
    """Return the composite identifier for ``key`` and ``account_id``."""
    _check_key(key)
    if not isinstance(account_id, UUID):
        raise MalformedIdentifier(f"account id must be a UUID, got {type(account_id).__name__}")
    return f"{key}{SEPARATOR}{account_id}"


def decode_composite_id(value: str) -> CompositeId:
    """Split a composite identifier back into its key and account UUID.

    Only strings produced by ``encode_composite_id`` are accepted: the UUID
    segment must be canonical lowercase and the key non-empty.
    """
    if not isinstance(value, str):
        raise MalformedIdentifier(f"invalid resource id: {value!r}")
    key, separator, account_part = value.rpartition(SEPARATOR)
    if not separator:
        raise MalformedIdentifier(f"invalid resource id: {value!r}: missing account id")
    if not _CANONICAL_UUID.fullmatch(account_part):
        raise MalformedIdentifier(f"invalid resource id: {value!r}: bad account id")
    try:
        _check_key(key)
    except MalformedIdentifier as exc:
        raise MalformedIdentifier(f"invalid resource id: {value!r}: {exc}") from None
    return CompositeId(key=key, account_id=UUID(account_part))


def parse_account_id(value: object) -> UUID:
    """Parse a plain cloud account id."""
    if not isinstance(value, str):
        raise MalformedIdentifier(f"invalid account id: {value!r}")
    try:
        return UUID(value)
    except ValueError as exc:
        raise MalformedIdentifier(f"invalid account id: {value!r}") from exc


def split_legacy_account_id(value: object) -> tuple[UUID, str]:
    """Split a historical ``<uuid>:<native id>`` account identifier."""
    if not isinstance(value, str):
        raise MalformedIdentifier(f"invalid legacy account id: {value!r}")
    parts = value.split(SEPARATOR)
    if len(parts) != 2 or not parts[1]:
        raise MalformedIdentifier(f"invalid legacy account id: {value!r}")
    return parse_account_id(parts[0]), parts[1]


def sha256_id(*parts: str) -> str:
    """Return the hex SHA-256 over the concatenated parts."""
    digest = hashlib.sha256()
    for part in parts:
        digest.update(part.encode("utf-8"))
    return digest.hexdigest()
