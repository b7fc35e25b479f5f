"""
Response Field Extraction — Prioritized lookup tables for gateway payloads.

The gateway is inconsistent about where it puts the token, the account
holder's name and the collection status code, so each is found by checking
an ordered list of field paths. The first present value wins;
falsy values and blank strings are skipped.
"""
from typing import Any, Optional, Sequence, Tuple

FieldPath = Tuple[str, ...]

TOKEN_FIELDS: Sequence[FieldPath] = (
    ("result",),
    ("token",),
    ("Token",),
    ("accessToken",),
    ("access_token",),
    ("data", "token"),
    ("data", "Token"),
)

ACCOUNT_NAME_FIELDS: Sequence[FieldPath] = (
    ("data", "nametocredit"),
    ("data", "NameToCredit"),
    ("nametocredit",),
    ("accountName",),
    ("AccountName",),
    ("name",),
    ("Name",),
)

COLLECTION_STATUS_FIELDS: Sequence[FieldPath] = (
    ("message", "status"),
    ("data", "status"),
)

COLLECTION_SUCCESS_CODES = frozenset({"000", "0"})


def lookup_path(data: Any, path: FieldPath) -> Any:
    """Walk ``path`` through nested mappings; None if any hop is missing."""
    current = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _is_present(value: Any) -> bool:
    # Falsy values (None, False, 0, empty containers) never count
    if not value:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def first_present(data: Any, paths: Sequence[FieldPath], default: Any = None) -> Any:
    for path in paths:
        value = lookup_path(data, path)
        if _is_present(value):
            return value
    return default


def extract_token(payload: Any) -> Optional[str]:
    token = first_present(payload, TOKEN_FIELDS)
    return str(token) if token is not None else None


def extract_account_name(payload: Any) -> Optional[str]:
    name = first_present(payload, ACCOUNT_NAME_FIELDS)
    return str(name).strip() if name is not None else None


def extract_collection_status(payload: Any) -> Any:
    return first_present(payload, COLLECTION_STATUS_FIELDS)


def is_collection_successful(payload: Any) -> bool:
    """Only the exact string codes "000" and "0" mean the funds moved."""
    status = extract_collection_status(payload)
    return isinstance(status, str) and status in COLLECTION_SUCCESS_CODES
