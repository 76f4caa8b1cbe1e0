"""Exceptions raised by the encoder, decoder and algorithm factories.

The ``JWT`` pipeline itself never raises for malformed input: it returns
``None`` (decode/encode) or ``False`` (verify). These exceptions cover the
configuration and format errors that must reach the caller.
"""

from __future__ import annotations

from typing import Any


class JWTError(Exception):
    """Base class for jwtkit errors."""

    code = "JWT_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidKeyIDError(JWTError):
    """No algorithm could be resolved for the header's key identifier."""

    code = "INVALID_KEY_ID"


class UnsupportedShapeError(JWTError):
    """The encoder was given something other than a header/claims pair."""

    code = "UNSUPPORTED_SHAPE"


class JWTEncodingError(JWTError):
    """Header or claims could not be encoded, or the signer failed."""

    code = "ENCODING_FAILED"


class InvalidJWTStringError(JWTError):
    """The input is not a compact JWT or its claims do not fit the requested type."""

    code = "INVALID_JWT_STRING"


class VerificationFailedError(JWTError):
    code = "FAILED_VERIFICATION"


class UnsupportedAlgorithmError(JWTError, ValueError):
    """Unknown algorithm name, or one whose backend is not installed."""

    code = "UNSUPPORTED_ALGORITHM"
