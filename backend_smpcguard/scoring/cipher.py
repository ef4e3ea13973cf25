"""
Simulated homomorphic-encryption serialization.

Produces an opaque-looking token for display; the value is trivially
recoverable by base64-decoding. Not encryption.
"""

from __future__ import annotations

import base64

from backend_smpcguard.scoring.random_source import (
    RandomSource,
    default_random_source,
    random_token,
)

CIPHER_PREFIX = "HE-CIPHER"
CIPHER_SALT_LENGTH = 5


def format_number(value: float) -> str:
    # Integral floats render without a trailing ".0" (1.0 -> "1").
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def encrypt_value(value: float, rng: RandomSource | None = None) -> str:
    """Return base64("HE-CIPHER-{value}-{5 base36 chars}")."""
    rng = rng if rng is not None else default_random_source()
    salt = random_token(rng, CIPHER_SALT_LENGTH)
    plain = f"{CIPHER_PREFIX}-{format_number(value)}-{salt}"
    return base64.b64encode(plain.encode("utf-8")).decode("ascii")


def decode_cipher(token: str) -> tuple[float, str]:
    """Inverse of encrypt_value: return (value, salt). Raises ValueError on malformed tokens."""
    try:
        plain = base64.b64decode(token, validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError) as e:
        raise ValueError(f"not a cipher token: {e}") from e
    prefix = CIPHER_PREFIX + "-"
    if not plain.startswith(prefix):
        raise ValueError("not a cipher token: missing prefix")
    body, sep, salt = plain[len(prefix):].rpartition("-")
    if not sep:
        raise ValueError("not a cipher token: missing salt")
    return float(body), salt
