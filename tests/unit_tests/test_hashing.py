"""
Hashers and the process-wide hasher.
"""

from types import SimpleNamespace

import pytest

import sugarlog.config
from sugarlog.config import LoggingSettings
from sugarlog.hashing import (
    Hasher,
    HasherError,
    HmacHasher,
    Sha256Hasher,
    canonical_bytes,
    get_global_hasher,
    set_global_hasher,
)


class TestSha256Hasher:
    def test_deterministic_and_redacted(self):
        hasher = Sha256Hasher()
        digest = hasher.hash("a@example.com")
        assert digest == hasher.hash("a@example.com")
        assert "example" not in digest
        assert len(digest) == 16

    def test_salt_changes_digest(self):
        assert Sha256Hasher(salt="a").hash("v") != Sha256Hasher(salt="b").hash("v")

    def test_full_length(self):
        assert len(Sha256Hasher(length=None).hash("v")) == 64

    def test_satisfies_protocol(self):
        assert isinstance(Sha256Hasher(), Hasher)
        assert isinstance(HmacHasher("k"), Hasher)


class TestHmacHasher:
    def test_secret_required(self):
        with pytest.raises(HasherError):
            HmacHasher("")

    def test_key_changes_digest(self):
        assert HmacHasher("k1").hash(42) != HmacHasher("k2").hash(42)

    def test_truncation(self):
        assert len(HmacHasher("k", length=8).hash("v")) == 8

    @pytest.mark.parametrize("length", [0, -4])
    def test_non_positive_length_rejected(self, length):
        with pytest.raises(HasherError):
            Sha256Hasher(length=length)
        with pytest.raises(HasherError):
            HmacHasher("k", length=length)


class TestCanonicalBytes:
    def test_mapping_order_is_irrelevant(self):
        assert canonical_bytes({"a": 1, "b": 2}) == canonical_bytes({"b": 2, "a": 1})

    def test_str_and_bytes(self):
        assert canonical_bytes("é") == "é".encode("utf-8")
        assert canonical_bytes(b"\x00") == b"\x00"

    def test_unserializable_falls_back_to_str(self):
        class Token:
            def __str__(self):
                return "token"

        assert canonical_bytes(Token()) == b'"token"'


class TestGlobalHasher:
    def test_unset_without_secret(self, monkeypatch):
        monkeypatch.setattr(sugarlog.config, "settings", SimpleNamespace(logging=LoggingSettings(hash_secret=None)))
        assert get_global_hasher() is None

    def test_explicit_hasher(self):
        hasher = Sha256Hasher()
        set_global_hasher(hasher)
        assert get_global_hasher() is hasher
        set_global_hasher(None)
        assert get_global_hasher() is None

    def test_secret_from_settings(self, monkeypatch):
        monkeypatch.setattr(sugarlog.config, "settings", SimpleNamespace(logging=LoggingSettings(hash_secret="s3cret")))
        hasher = get_global_hasher()
        assert hasher is get_global_hasher()
        assert hasher.hash("v") == HmacHasher("s3cret").hash("v")
