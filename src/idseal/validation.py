"""Input validation for seeds, custom IDs and encrypted tokens.

Each validator returns None when the input is acceptable and raises
InputError otherwise. Whitespace around the value is ignored for the
checks only; callers still pass the original string on to the transform.
"""

from __future__ import annotations

import re

from idseal.errors import ErrorKind, InputError

CUSTOM_ID_MAX_LEN = 100
ENCRYPTED_ID_MIN_LEN = 2

_UUID_STANDARD = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
# Linux machine-id: same 128 bits, no hyphens
_UUID_MACHINE_ID = re.compile(r"[0-9a-fA-F]{32}")
_BASE64_CHARS = re.compile(r"[A-Za-z0-9+/=]+")
_CONTROL_CHARS = ("\0", "\n", "\r", "\t")


def validate_uuid(uuid: str) -> None:
    value = uuid.strip()
    if not value:
        raise InputError(ErrorKind.EMPTY_INPUT, "UUID cannot be empty")
    if not (_UUID_STANDARD.fullmatch(value) or _UUID_MACHINE_ID.fullmatch(value)):
        raise InputError(
            ErrorKind.FORMAT_ERROR,
            "UUID must be 8-4-4-4-12 hex digits or 32 hex digits",
        )


def validate_custom_id(custom_id: str) -> None:
    value = custom_id.strip()
    if not value:
        raise InputError(ErrorKind.EMPTY_INPUT, "Custom ID cannot be empty")
    # Counts characters. The Rust CLI counts UTF-8 bytes, so it rejects more
    # than 33 CJK characters where this accepts up to 100.
    if len(value) > CUSTOM_ID_MAX_LEN:
        raise InputError(
            ErrorKind.TOO_LONG,
            f"Custom ID cannot exceed {CUSTOM_ID_MAX_LEN} characters",
        )
    if any(ch in value for ch in _CONTROL_CHARS):
        raise InputError(
            ErrorKind.CONTROL_CHARACTER,
            "Custom ID cannot contain NUL, newline, carriage return or tab",
        )
    try:
        custom_id.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InputError(
            ErrorKind.INVALID_CHARACTERS,
            "Custom ID contains characters that cannot be encoded as UTF-8",
        ) from exc


def validate_encrypted_id(encrypted_id: str) -> None:
    """Check length and alphabet only. Does not strip the prefix or decode."""
    value = encrypted_id.strip()
    if not value:
        raise InputError(ErrorKind.EMPTY_INPUT, "Encrypted ID cannot be empty")
    if len(value) < ENCRYPTED_ID_MIN_LEN:
        raise InputError(
            ErrorKind.TOO_SHORT,
            f"Encrypted ID must be at least {ENCRYPTED_ID_MIN_LEN} characters",
        )
    if not _BASE64_CHARS.fullmatch(value):
        raise InputError(
            ErrorKind.INVALID_CHARACTERS,
            "Encrypted ID may only contain A-Z, a-z, 0-9, '+', '/' and '='",
        )
