"""Error kinds shared by the validator, the transform and the facade."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Every failure the core can report. Values double as wire names."""

    EMPTY_INPUT = "empty_input"
    FORMAT_ERROR = "format_error"
    TOO_LONG = "too_long"
    TOO_SHORT = "too_short"
    CONTROL_CHARACTER = "control_character"
    INVALID_CHARACTERS = "invalid_characters"
    VALIDATION_ERROR = "validation_error"
    DECODE_ERROR = "decode_error"
    DECRYPTION_ERROR = "decryption_error"
    ENCODING_ERROR = "encoding_error"


class InputError(ValueError):
    """Raised inside the core when an input cannot be processed.

    The facade catches it and turns it into a Failure; it never escapes
    ``encrypt_id`` or ``decrypt_id``.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"InputError({self.kind.value!r}, {self.message!r})"
