"""Environment-driven configuration using pydantic-settings."""

from __future__ import annotations

import secrets
import warnings
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from jwtkit.algorithms import HMAC_ALGORITHMS, Algorithm, get_algorithm
from jwtkit.header import Header
from jwtkit.jwt import JWT
from jwtkit.logging import configure_logging
from jwtkit.validation import ValidateClaimsResult


def _read_key(path: Path | None, setting: str) -> str | None:
    if path is None:
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Unable to read key file at '{path}' from JWTKIT_{setting}.") from exc


class Settings(BaseSettings):
    """Token settings. All values can be overridden via env vars prefixed ``JWTKIT_``."""

    model_config = SettingsConfigDict(
        env_prefix="JWTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- environment ---
    env: str = "development"
    log_level: str = "info"

    # --- signing ---
    algorithm: str = "HS256"
    signing_key: str = ""
    private_key_path: Path | None = None
    public_key_path: Path | None = None
    key_id: str | None = None

    # --- validation ---
    issuer: str | None = None
    audience: str | None = None

    def effective_signing_key(self) -> str:
        """Return signing key, generating an ephemeral one in dev mode."""
        if self.signing_key:
            return self.signing_key
        if self.env == "production":
            raise RuntimeError("JWTKIT_SIGNING_KEY must be set in production mode.")
        ephemeral = secrets.token_urlsafe(32)
        warnings.warn(
            "Using an ephemeral JWT signing key. Set JWTKIT_SIGNING_KEY for production.",
            UserWarning,
            stacklevel=2,
        )
        return ephemeral

    def build_algorithm(self) -> Algorithm:
        """Build the configured algorithm from the secret or the PEM key files."""
        if self.algorithm == "none":
            return get_algorithm("none")
        if self.algorithm in HMAC_ALGORITHMS:
            return get_algorithm(self.algorithm, key=self.effective_signing_key())

        private_key = _read_key(self.private_key_path, "PRIVATE_KEY_PATH")
        public_key = _read_key(self.public_key_path, "PUBLIC_KEY_PATH")
        if private_key is None and public_key is None:
            raise RuntimeError(
                f"Missing key configuration for {self.algorithm}: "
                "set JWTKIT_PRIVATE_KEY_PATH or JWTKIT_PUBLIC_KEY_PATH."
            )
        return get_algorithm(self.algorithm, private_key=private_key, public_key=public_key)

    def configure_logging(self, *, json_logs: bool = False) -> None:
        """Configure structlog output at the configured ``log_level``."""
        configure_logging(self.log_level, json_logs=json_logs)

    def header(self) -> Header:
        return Header(kid=self.key_id)

    def validate_token(self, token: JWT) -> ValidateClaimsResult:
        """Validate ``token``'s claims against the configured issuer and audience."""
        return token.validate_claims(issuer=self.issuer, audience=self.audience)
