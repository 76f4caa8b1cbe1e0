"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from jwtkit import JWT, AsymmetricAlgorithm, Claims, HMACAlgorithm, NoneAlgorithm
from jwtkit.config import Settings
from jwtkit.validation import ValidateClaimsResult


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "ENV",
        "LOG_LEVEL",
        "ALGORITHM",
        "SIGNING_KEY",
        "PRIVATE_KEY_PATH",
        "PUBLIC_KEY_PATH",
        "KEY_ID",
        "ISSUER",
        "AUDIENCE",
    ):
        monkeypatch.delenv(f"JWTKIT_{name}", raising=False)


def test_settings_read_prefixed_environment(monkeypatch, hmac_secret):
    monkeypatch.setenv("JWTKIT_ALGORITHM", "HS512")
    monkeypatch.setenv("JWTKIT_SIGNING_KEY", hmac_secret)
    monkeypatch.setenv("JWTKIT_KEY_ID", "primary")

    settings = Settings()
    algorithm = settings.build_algorithm()

    assert isinstance(algorithm, HMACAlgorithm)
    assert algorithm.name == "HS512"
    assert settings.header().kid == "primary"


def test_ephemeral_key_in_development_warns():
    settings = Settings()

    with pytest.warns(UserWarning, match="ephemeral"):
        key = settings.effective_signing_key()

    assert len(key) >= 32


def test_missing_key_in_production_is_an_error():
    with pytest.raises(RuntimeError):
        Settings(env="production").effective_signing_key()


def test_none_algorithm_setting():
    assert isinstance(Settings(algorithm="none").build_algorithm(), NoneAlgorithm)


def test_asymmetric_algorithm_reads_pem_files(tmp_path, rsa_keys):
    private_path = tmp_path / "private.pem"
    public_path = tmp_path / "public.pem"
    private_path.write_text(rsa_keys[0], encoding="utf-8")
    public_path.write_text(rsa_keys[1], encoding="utf-8")

    signer = Settings(algorithm="RS256", private_key_path=private_path).build_algorithm()
    verifier = Settings(algorithm="RS256", public_key_path=public_path).build_algorithm()

    assert isinstance(signer, AsymmetricAlgorithm)
    token = JWT(claims=Claims(sub="1")).sign(signer)
    assert JWT.verify(token, verifier)


def test_asymmetric_algorithm_without_keys_is_an_error():
    with pytest.raises(RuntimeError, match="Missing key configuration"):
        Settings(algorithm="ES256").build_algorithm()


def test_unreadable_key_file_is_an_error(tmp_path):
    with pytest.raises(RuntimeError, match="Unable to read key file"):
        Settings(algorithm="RS256", private_key_path=tmp_path / "absent.pem").build_algorithm()


def test_validate_token_uses_configured_expectations():
    settings = Settings(issuer="me", audience="api")

    assert settings.validate_token(JWT(claims=Claims(iss="me", aud="api"))) is (
        ValidateClaimsResult.SUCCESS
    )
    assert settings.validate_token(JWT(claims=Claims(iss="me", aud=["x", "y"]))) is (
        ValidateClaimsResult.MULTIPLE_AUDIENCES
    )


def test_configure_logging_uses_configured_level(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "jwtkit.config.configure_logging",
        lambda level, *, json_logs: calls.append((level, json_logs)),
    )
    monkeypatch.setenv("JWTKIT_LOG_LEVEL", "debug")

    Settings().configure_logging(json_logs=True)

    assert calls == [("debug", True)]
