"""Encrypt and decrypt custom IDs: the entry points front ends call.

Both operations are stateless and never raise on bad input: every outcome
comes back as an EncryptSuccess, DecryptSuccess or Failure value.

The token prefix is the caller's business. ``encrypt_id`` returns only the
base64 body; ``format_token`` adds the prefix. ``decrypt_id`` drops the
first two characters of whatever token it receives.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from idseal import crypto
from idseal.errors import ErrorKind, InputError
from idseal.validation import validate_custom_id, validate_encrypted_id, validate_uuid

logger = logging.getLogger("idseal")

TOKEN_PREFIX = "00"
PREFIX_LEN = len(TOKEN_PREFIX)


@dataclass(frozen=True)
class EncryptSuccess:
    original: str
    token_body: str

    ok = True


@dataclass(frozen=True)
class DecryptSuccess:
    token: str
    original: str

    ok = True


@dataclass(frozen=True)
class Failure:
    """A failed operation.

    ``reason`` holds the validator's own kind (EMPTY_INPUT, TOO_LONG, ...)
    when ``kind`` is VALIDATION_ERROR, and is None otherwise.
    """

    kind: ErrorKind
    detail: str
    reason: ErrorKind | None = None

    ok = False


OperationResult = EncryptSuccess | DecryptSuccess | Failure


def _validation_failure(op: str, exc: InputError) -> Failure:
    logger.debug("%s rejected: %s", op, exc.kind.value)
    return Failure(ErrorKind.VALIDATION_ERROR, exc.message, reason=exc.kind)


def format_token(token_body: str, prefix: str = TOKEN_PREFIX) -> str:
    """Prepend the scheme-version prefix to a base64 token body."""
    if len(prefix) != PREFIX_LEN:
        raise ValueError(f"token prefix must be {PREFIX_LEN} characters: {prefix!r}")
    return prefix + token_body


def encrypt_id(custom_id: str, seed: str) -> OperationResult:
    try:
        validate_custom_id(custom_id)
        validate_uuid(seed)
    except InputError as exc:
        return _validation_failure("encrypt", exc)

    body = crypto.encrypt(custom_id.encode("utf-8"), seed)
    return EncryptSuccess(original=custom_id, token_body=body)


def decrypt_id(token: str, seed: str) -> OperationResult:
    try:
        validate_encrypted_id(token)
        validate_uuid(seed)
    except InputError as exc:
        return _validation_failure("decrypt", exc)

    if len(token) < PREFIX_LEN:
        logger.debug("decrypt rejected: %s", ErrorKind.FORMAT_ERROR.value)
        return Failure(ErrorKind.FORMAT_ERROR, "token too short")

    try:
        plain = crypto.decrypt(token[PREFIX_LEN:], seed)
    except InputError as exc:
        logger.debug("decrypt failed: %s", exc.kind.value)
        return Failure(exc.kind, exc.message)

    try:
        original = plain.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.debug("decrypt failed: %s", ErrorKind.ENCODING_ERROR.value)
        return Failure(
            ErrorKind.ENCODING_ERROR, f"Decrypted ID is not valid UTF-8: {exc}"
        )

    return DecryptSuccess(token=token, original=original)
