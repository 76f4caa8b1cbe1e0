"""
Shared pytest fixtures for jwtkit tests.

Key pairs are generated in memory once per session with ``cryptography``;
nothing is read from disk.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from jwtkit import Claims, Header


def _pem_pair(private_key) -> tuple[str, str]:
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("utf-8")
    )
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_keys() -> tuple[str, str]:
    """RSA 2048 private/public PEM pair."""
    return _pem_pair(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope="session")
def other_rsa_keys() -> tuple[str, str]:
    """A second, unrelated RSA pair for negative-path tests."""
    return _pem_pair(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope="session")
def ec_p256_keys() -> tuple[str, str]:
    return _pem_pair(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope="session")
def ed25519_keys() -> tuple[str, str]:
    return _pem_pair(ed25519.Ed25519PrivateKey.generate())


@pytest.fixture
def header() -> Header:
    return Header(kid="key-1")


@pytest.fixture
def claims() -> Claims:
    return Claims(
        iss="https://issuer.example",
        aud=["api"],
        exp=1_700_003_600,
        iat=1_699_999_000,
        name="Kitura",
        admin=True,
        score=4.5,
    )


@pytest.fixture
def now() -> datetime:
    """Fixed instant for time-claim checks: 2023-11-14T22:13:20Z."""
    return datetime.fromtimestamp(1_700_000_000, UTC)


@pytest.fixture
def hmac_secret() -> str:
    return "test-hmac-secret-for-local-tests-0123456789"
