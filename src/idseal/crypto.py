"""Key derivation, secretbox sealing and the base64 token body.

Tokens are bound to a machine identifier. The identifier's UTF-8 bytes are
zero-padded or truncated to a secretbox key and every token is sealed under
the same all-zero nonce. Neither is a cryptographic best practice; both are
fixed by the "00" token scheme and changing them breaks every issued token.
A new scheme needs a new two-character prefix.
"""

from __future__ import annotations

import base64
import binascii

from nacl.exceptions import CryptoError
from nacl.secret import SecretBox

from idseal.errors import ErrorKind, InputError

KEY_LEN = SecretBox.KEY_SIZE
NONCE_LEN = SecretBox.NONCE_SIZE
NONCE = bytes(NONCE_LEN)


def derive_key(seed: str) -> bytes:
    """Pad or truncate the seed's UTF-8 bytes to exactly KEY_LEN bytes."""
    key = seed.encode("utf-8")[:KEY_LEN].ljust(KEY_LEN, b"\x00")
    assert len(key) == KEY_LEN
    return key


def seal(plaintext: bytes, key: bytes) -> bytes:
    """Encrypt and authenticate. Output is MAC followed by ciphertext."""
    return SecretBox(key).encrypt(plaintext, NONCE).ciphertext


def open_sealed(ciphertext: bytes, key: bytes) -> bytes:
    """Verify and decrypt a blob produced by :func:`seal`."""
    if len(ciphertext) < SecretBox.MACBYTES:
        raise InputError(
            ErrorKind.DECRYPTION_ERROR, "Decryption failed: token is truncated"
        )
    try:
        return SecretBox(key).decrypt(ciphertext, NONCE)
    except CryptoError as exc:
        raise InputError(
            ErrorKind.DECRYPTION_ERROR,
            "Decryption failed: wrong UUID or corrupted token",
        ) from exc


def encode(sealed: bytes) -> str:
    return base64.b64encode(sealed).decode("ascii")


def decode(text: str) -> bytes:
    """Strict canonical base64. Rejects stray characters, bad padding and
    non-zero bits left over in the final symbol.
    """
    try:
        raw = base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise InputError(
            ErrorKind.DECODE_ERROR, f"Token body is not valid base64: {exc}"
        ) from exc
    if encode(raw) != text:
        raise InputError(
            ErrorKind.DECODE_ERROR, "Token body is not canonical base64"
        )
    return raw


def encrypt(data: bytes, seed: str) -> str:
    """Seal ``data`` under the key derived from ``seed``; return the base64 body."""
    return encode(seal(data, derive_key(seed)))


def decrypt(body: str, seed: str) -> bytes:
    """Decode a base64 body and open it under the key derived from ``seed``."""
    sealed = decode(body)
    return open_sealed(sealed, derive_key(seed))
