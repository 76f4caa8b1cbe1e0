"""Validation of the registered identity and time claims."""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from jwtkit.claims import Claims, numeric_date


class ValidateClaimsResult(enum.Enum):
    SUCCESS = "success"
    MISMATCHED_ISSUER = "mismatched_issuer"
    MISMATCHED_AUDIENCE = "mismatched_audience"
    MULTIPLE_AUDIENCES = "multiple_audiences"
    EMPTY_AUDIENCE = "empty_audience"
    INVALID_AUDIENCE = "invalid_audience"
    EXPIRED = "expired"
    INVALID_EXPIRATION = "invalid_expiration"
    NOT_BEFORE = "not_before"
    INVALID_NOT_BEFORE = "invalid_not_before"
    ISSUED_AT = "issued_at"
    INVALID_ISSUED_AT = "invalid_issued_at"

    def __bool__(self) -> bool:
        return self is ValidateClaimsResult.SUCCESS


def _check_audience(value: object, audience: str) -> ValidateClaimsResult | None:
    if isinstance(value, list | tuple) and all(isinstance(v, str) for v in value):
        if not value:
            return ValidateClaimsResult.EMPTY_AUDIENCE
        if len(value) > 1:
            return ValidateClaimsResult.MULTIPLE_AUDIENCES
        if value[0] != audience:
            return ValidateClaimsResult.MISMATCHED_AUDIENCE
        return None
    if isinstance(value, str):
        return ValidateClaimsResult.MISMATCHED_AUDIENCE if value != audience else None
    return ValidateClaimsResult.INVALID_AUDIENCE


def validate_claims(
    claims: Claims,
    *,
    issuer: str | None = None,
    audience: str | None = None,
    now: datetime | None = None,
) -> ValidateClaimsResult:
    """Check ``iss``, ``aud``, ``exp``, ``nbf`` and ``iat`` in that order.

    The first failing check decides the result. A claim that is absent is not
    checked; ``iss`` and ``aud`` are only checked when an expected value is
    given. A list audience must hold exactly one entry to match.
    """
    current = (now or datetime.now(UTC)).timestamp()

    if issuer is not None:
        iss = claims.get("iss")
        if isinstance(iss, str) and iss != issuer:
            return ValidateClaimsResult.MISMATCHED_ISSUER

    if audience is not None:
        aud = claims.get("aud")
        if aud is not None:
            failure = _check_audience(aud, audience)
            if failure is not None:
                return failure

    exp = claims.get("exp")
    if exp is not None:
        expires = numeric_date(exp)
        if expires is None:
            return ValidateClaimsResult.INVALID_EXPIRATION
        if expires < current:
            return ValidateClaimsResult.EXPIRED

    nbf = claims.get("nbf")
    if nbf is not None:
        not_before = numeric_date(nbf)
        if not_before is None:
            return ValidateClaimsResult.INVALID_NOT_BEFORE
        if not_before > current:
            return ValidateClaimsResult.NOT_BEFORE

    iat = claims.get("iat")
    if iat is not None:
        issued_at = numeric_date(iat)
        if issued_at is None:
            return ValidateClaimsResult.INVALID_ISSUED_AT
        if issued_at > current:
            return ValidateClaimsResult.ISSUED_AT

    return ValidateClaimsResult.SUCCESS
