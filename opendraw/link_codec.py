"""Encrypted per-giver tokens.

A token is ``nonce || ciphertext || tag`` under AES-256-GCM, written in the
URL-safe base64 alphabet without padding. The key comes from the giver's name
through PBKDF2 with a fixed, public salt, so only someone who supplies that
exact name can open it.
"""

from __future__ import annotations

import base64
import hashlib
import logging

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes

from opendraw.errors import InvalidOrTamperedLink

logger = logging.getLogger(__name__)

# Changing any of these invalidates every link already handed out.
SALT = b"segredex-salt"
ITERATIONS = 100_000
KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


def derive_key(giver: str) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", giver.encode("utf-8"), SALT, ITERATIONS, dklen=KEY_SIZE)


def to_base64url(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii").replace("+", "-").replace("/", "_").rstrip("=")


def from_base64url(text: str) -> bytes:
    text = text.replace("-", "+").replace("_", "/")
    text += "=" * (-len(text) % 4)
    return base64.b64decode(text, validate=True)


def encode(receiver: str, giver: str) -> str:
    """Encrypt ``receiver`` so that only ``giver`` can read it."""
    key = derive_key(giver)
    nonce = get_random_bytes(NONCE_SIZE)
    cipher = AES.new(key, AES.MODE_GCM, nonce=nonce, mac_len=TAG_SIZE)
    ciphertext, tag = cipher.encrypt_and_digest(receiver.encode("utf-8"))
    return to_base64url(nonce + ciphertext + tag)


def decode(token: str, giver: str) -> str:
    """Recover the receiver name, or raise :class:`InvalidOrTamperedLink`."""
    key = derive_key(giver)
    try:
        raw = from_base64url(token)
        # base64 ignores the spare low bits of the last symbol
        if to_base64url(raw) != token or len(raw) < NONCE_SIZE + TAG_SIZE:
            raise ValueError("not a canonical token")
        nonce, body, tag = raw[:NONCE_SIZE], raw[NONCE_SIZE:-TAG_SIZE], raw[-TAG_SIZE:]
        cipher = AES.new(key, AES.MODE_GCM, nonce=nonce, mac_len=TAG_SIZE)
        return cipher.decrypt_and_verify(body, tag).decode("utf-8")
    except ValueError:
        logger.info("Rejected an invalid or tampered link")
        raise InvalidOrTamperedLink() from None
