"""Unit tests for PBKDF2 password hashing."""

import pytest

from libraryman.services.password_hasher import (
    ALGORITHM,
    Pbkdf2PasswordVerifier,
    normalize_password,
)


@pytest.fixture
def verifier():
    """Verifier with a low iteration count for speed."""
    return Pbkdf2PasswordVerifier(iterations=1000)


def test_hash_format(verifier):
    """Test hashes carry algorithm, iterations, salt and key."""
    hashed = verifier.hash("correct horse")

    algorithm, iterations, salt_hex, key_hex = hashed.split("$")
    assert algorithm == ALGORITHM
    assert iterations == "1000"
    assert len(bytes.fromhex(salt_hex)) == 16
    assert len(bytes.fromhex(key_hex)) == 32


def test_hash_is_salted(verifier):
    """Test the same password hashes differently each time."""
    assert verifier.hash("correct horse") != verifier.hash("correct horse")


def test_hash_never_contains_plaintext(verifier):
    """Test the plaintext does not appear in the stored form."""
    assert "correct horse" not in verifier.hash("correct horse")


def test_matches_correct_password(verifier):
    """Test verification succeeds for the hashed password."""
    hashed = verifier.hash("correct horse")

    assert verifier.matches("correct horse", hashed)
    assert not verifier.matches("battery staple", hashed)


def test_matches_uses_stored_iterations(verifier):
    """Test hashes made with another iteration count still verify."""
    hashed = Pbkdf2PasswordVerifier(iterations=2000).hash("correct horse")

    assert verifier.matches("correct horse", hashed)


@pytest.mark.parametrize(
    "hashed",
    [
        "",
        "plaintext",
        "md5$1000$00$00",
        "pbkdf2_sha256$notanumber$00$00",
        "pbkdf2_sha256$1000$zz$00",
    ],
)
def test_matches_malformed_hash(verifier, hashed):
    """Test malformed stored values never verify."""
    assert verifier.matches("anything", hashed) is False


def test_same_password_normalizes(verifier):
    """Test NFKC-equivalent passwords compare equal."""
    assert verifier.same_password("ｐａｓｓ", "pass")
    assert verifier.same_password("\u212b", "\u00c5")
    assert not verifier.same_password("pass", "Pass")


def test_hash_and_match_across_normalization(verifier):
    """Test a hash made from one form verifies with the other."""
    hashed = verifier.hash("ｐａｓｓｗｏｒｄ")

    assert verifier.matches("password", hashed)


def test_normalize_password_returns_utf8_bytes():
    """Test the canonical form is UTF-8 bytes."""
    assert normalize_password("ñ") == "ñ".encode("utf-8")


def test_invalid_iterations():
    """Test non-positive iteration counts are rejected."""
    with pytest.raises(ValueError):
        Pbkdf2PasswordVerifier(iterations=0)
