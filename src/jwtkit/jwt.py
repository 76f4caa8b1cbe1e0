"""JWT aggregate and the compact serialization pipeline.

A compact token is ``<header>.<claims>`` for unsecured (``alg=none``) tokens
and ``<header>.<claims>.<signature>`` for signed ones, each segment being
Base64URL without padding. Malformed input never raises here: encoding and
decoding return ``None``, verification returns ``False``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_core import PydanticSerializationError

from jwtkit import base64url
from jwtkit.algorithms import Algorithm, NoneAlgorithm
from jwtkit.claims import Claims
from jwtkit.header import Header
from jwtkit.logging import get_logger
from jwtkit.validation import ValidateClaimsResult, validate_claims

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Segment helpers
# ---------------------------------------------------------------------------


def _is_finite(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Mapping):
        return all(_is_finite(v) for v in value.values())
    if isinstance(value, list | tuple):
        return all(_is_finite(v) for v in value)
    return True


def encode_segment(value: BaseModel | Mapping[str, Any]) -> str | None:
    """Serialize ``value`` to compact JSON and Base64URL-encode it.

    ``inf`` and ``nan`` have no JSON form and fail the encoding for models and
    mappings alike.
    """
    try:
        if isinstance(value, BaseModel):
            if not _is_finite(value.model_dump(by_alias=True, exclude_none=True)):
                raise ValueError("Out of range float values are not JSON compliant")
            data = value.model_dump_json(by_alias=True, exclude_none=True)
        else:
            data = json.dumps(value, separators=(",", ":"), allow_nan=False)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        logger.debug("Could not serialize segment", error=str(exc))
        return None
    return base64url.encode(data.encode("utf-8"))


def sign_segments(encoded_header: str, encoded_claims: str, algorithm: Algorithm) -> str | None:
    """Join the encoded segments and append the signature, if any."""
    signing_input = f"{encoded_header}.{encoded_claims}"
    if isinstance(algorithm, NoneAlgorithm):
        return signing_input

    signature = algorithm.sign(signing_input.encode("ascii"))
    if signature is None:
        logger.debug("Signer produced no signature", alg=algorithm.name)
        return None
    return f"{signing_input}.{base64url.encode(signature)}"


def split_token(token: str) -> list[str] | None:
    segments = token.split(".")
    if len(segments) not in (2, 3):
        return None
    return segments


def _decode_object(segment: str) -> dict[str, Any] | None:
    data = base64url.decode(segment)
    if data is None:
        return None
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    return obj if isinstance(obj, dict) else None


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------


class JWT(BaseModel):
    """A JSON Web Token: one :class:`Header` and one claim set.

    ``claims`` may be any :class:`Claims` subclass instance; it is kept as is.

    Usage::

        token = JWT(claims=Claims(iss="me", name="Kitura"))
        signed = token.sign(rs256(private_key=pem))
    """

    header: Header = Field(default_factory=Header)
    claims: Claims = Field(default_factory=Claims)

    def sign(self, algorithm: Algorithm) -> str | None:
        """Sign with ``algorithm`` and return the compact token.

        Sets ``header.alg`` to ``algorithm.name``. Returns ``None`` if the
        header or claims cannot be encoded or the algorithm cannot sign.
        """
        self.header.alg = algorithm.name
        encoded = self._encode_segments()
        if encoded is None:
            return None
        return sign_segments(*encoded, algorithm)

    def encode(self) -> str | None:
        """Return the unsecured two-segment token, with ``alg`` set to ``none``."""
        return self.sign(NoneAlgorithm())

    def _encode_segments(self) -> tuple[str, str] | None:
        encoded_header = encode_segment(self.header)
        encoded_claims = encode_segment(self.claims)
        if encoded_header is None or encoded_claims is None:
            return None
        return encoded_header, encoded_claims

    @staticmethod
    def verify(token: str, algorithm: Algorithm) -> bool:
        """Check the signature of a three-segment token.

        Unsigned two-segment tokens always fail; a caller accepting
        ``alg=none`` has to allow that explicitly.
        """
        segments = token.split(".")
        if len(segments) != 3:
            return False
        signature = base64url.decode(segments[2])
        if signature is None:
            return False
        return algorithm.verify(signature, f"{segments[0]}.{segments[1]}".encode())

    @classmethod
    def decode(cls, token: str) -> JWT | None:
        """Parse a compact token without verifying it.

        Claims come back as a generic :class:`Claims`; mapping them onto an
        application type is up to the caller (see :class:`jwtkit.JWTDecoder`).
        """
        segments = split_token(token)
        if segments is None:
            return None
        header = _decode_object(segments[0])
        claims = _decode_object(segments[1])
        if header is None or claims is None:
            return None
        try:
            return cls(
                header=Header.from_json_object(header),
                claims=Claims.from_json_object(claims),
            )
        except ValidationError as exc:
            logger.debug("Token segments do not form a JWT", error=str(exc))
            return None

    def validate_claims(
        self,
        issuer: str | None = None,
        audience: str | None = None,
        *,
        now: datetime | None = None,
    ) -> ValidateClaimsResult:
        return validate_claims(self.claims, issuer=issuer, audience=audience, now=now)
