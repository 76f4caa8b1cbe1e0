"""Verifying decoder: compact string to a JWT with application claims."""

from __future__ import annotations

from typing import TypeVar

from pydantic import ValidationError

from jwtkit.algorithms import Algorithm, KeyResolver, NoneAlgorithm, resolve_algorithm
from jwtkit.claims import Claims
from jwtkit.errors import InvalidJWTStringError, VerificationFailedError
from jwtkit.jwt import JWT
from jwtkit.logging import get_logger

logger = get_logger(__name__)

ClaimsT = TypeVar("ClaimsT", bound=Claims)


def get_unverified_kid(token: str) -> str | None:
    """Extract the kid from the JWT header without verification."""
    decoded = JWT.decode(token)
    if decoded is None:
        return None
    return decoded.header.kid


class JWTDecoder:
    """Decode and verify compact tokens.

    The algorithm is either fixed, or looked up per token from the unverified
    header ``kid`` through ``key_resolver``. Claims validation is left to the
    caller (:meth:`JWT.validate_claims`).
    """

    def __init__(
        self,
        algorithm: Algorithm | None = None,
        *,
        key_resolver: KeyResolver | None = None,
    ) -> None:
        if algorithm is None and key_resolver is None:
            raise ValueError("JWTDecoder needs an algorithm or a key resolver")
        self.algorithm = algorithm
        self.key_resolver = key_resolver

    def decode(self, token: str | bytes, claims_type: type[ClaimsT] = Claims) -> JWT:  # type: ignore[assignment]
        if isinstance(token, bytes):
            try:
                token = token.decode("ascii")
            except UnicodeDecodeError as exc:
                raise InvalidJWTStringError("Token is not ASCII") from exc

        decoded = JWT.decode(token)
        if decoded is None:
            raise InvalidJWTStringError("Not a compact JWT")

        algorithm = resolve_algorithm(self.algorithm, self.key_resolver, decoded.header.kid)
        if isinstance(algorithm, NoneAlgorithm) and token.count(".") == 1:
            verified = True
        else:
            verified = JWT.verify(token, algorithm)
        if not verified:
            logger.debug("Signature verification failed", alg=algorithm.name)
            raise VerificationFailedError(
                "Signature verification failed", details={"alg": algorithm.name}
            )

        try:
            claims = claims_type.model_validate(decoded.claims.to_dict())
        except ValidationError as exc:
            raise InvalidJWTStringError(
                f"Claims do not match {claims_type.__name__}",
                details={"errors": exc.errors(include_url=False)},
            ) from exc
        return JWT(header=decoded.header, claims=claims)
