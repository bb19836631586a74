"""
Field redaction.

A ``Hasher`` turns a sensitive value into a stable digest so that log records
stay correlateable without carrying the raw value.
"""

from __future__ import annotations

import hmac
import threading
from hashlib import sha256
from typing import Any, Protocol, runtime_checkable

import orjson


class HasherError(ValueError):
    pass


@runtime_checkable
class Hasher(Protocol):
    def hash(self, value: Any) -> str: ...


def canonical_bytes(value: Any) -> bytes:
    """Stable byte representation of ``value`` used as hash input."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    return orjson.dumps(value, default=str, option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS)


def _check_length(length: int | None) -> int | None:
    if length is not None and length <= 0:
        raise HasherError(f"digest length must be positive, got {length}")
    return length


class Sha256Hasher:
    """Salted SHA-256 hex digest, truncated to ``length`` characters (``None`` keeps all 64)."""

    def __init__(self, salt: str | bytes = "", length: int | None = 16):
        self._salt = salt.encode("utf-8") if isinstance(salt, str) else salt
        self._length = _check_length(length)

    def hash(self, value: Any) -> str:
        digest = sha256(self._salt + canonical_bytes(value)).hexdigest()
        return digest[: self._length] if self._length is not None else digest


class HmacHasher:
    """Keyed HMAC-SHA256 hex digest."""

    def __init__(self, secret: str | bytes, length: int | None = None):
        if not secret:
            raise HasherError("hasher secret is required")
        self._key = secret.encode("utf-8") if isinstance(secret, str) else secret
        self._length = _check_length(length)

    def hash(self, value: Any) -> str:
        digest = hmac.new(self._key, canonical_bytes(value), sha256).hexdigest()
        return digest[: self._length] if self._length is not None else digest


# =============================================================================
# Global State
# =============================================================================

_lock = threading.Lock()
_global_hasher: Hasher | None = None


def set_global_hasher(hasher: Hasher | None) -> None:
    """Install the process-wide hasher used when a logger carries none."""
    global _global_hasher
    with _lock:
        _global_hasher = hasher


def get_global_hasher() -> Hasher | None:
    """Return the process-wide hasher.

    Falls back to an ``HmacHasher`` keyed with ``SUGARLOG_HASH_SECRET`` when
    nothing was installed explicitly.
    """
    global _global_hasher
    hasher = _global_hasher
    if hasher is not None:
        return hasher

    from .config import settings

    secret = settings.logging.hash_secret
    if secret is None or not secret.get_secret_value():
        return None
    with _lock:
        if _global_hasher is None:
            _global_hasher = HmacHasher(secret.get_secret_value())
        return _global_hasher
