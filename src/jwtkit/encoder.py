"""Encoder turning JWT-shaped objects into signed compact strings.

Usage::

    class MyClaims(Claims):
        name: str

    @dataclass
    class Token:
        header: Header
        claims: MyClaims

    encoder = JWTEncoder(rs256(private_key=pem))
    encoder.encode_to_string(Token(Header(), MyClaims(name="John Doe")))

Only objects whose fields are exactly ``header`` and ``claims`` are accepted;
:class:`jwtkit.JWT` qualifies, as does any pydantic model, dataclass or
mapping with the same two fields.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel

from jwtkit.algorithms import Algorithm, KeyResolver, resolve_algorithm
from jwtkit.errors import JWTEncodingError, UnsupportedShapeError
from jwtkit.header import Header
from jwtkit.jwt import encode_segment, sign_segments
from jwtkit.logging import get_logger

logger = get_logger(__name__)


def _fields(value: Any) -> Iterator[tuple[Any, Any]]:
    if isinstance(value, BaseModel):
        for name in type(value).model_fields:
            yield name, getattr(value, name)
        yield from (value.model_extra or {}).items()
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        for field in dataclasses.fields(value):
            yield field.name, getattr(value, field.name)
    elif isinstance(value, Mapping):
        yield from value.items()
    else:
        raise UnsupportedShapeError(
            "JWTEncoder can only encode JWT tokens",
            details={"type": type(value).__name__},
        )


def _claims_payload(value: Any) -> BaseModel | Mapping[str, Any]:
    if isinstance(value, BaseModel | Mapping):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise JWTEncodingError(
        "Failed to encode claims", details={"type": type(value).__name__}
    )


class JWTEncoder:
    """Sign and encode JWT-shaped objects.

    With ``algorithm`` every token is signed with it. Without one, the
    header's ``kid`` is passed to ``key_resolver`` for each token. The encoder
    keeps no state between calls and can be shared between threads.
    """

    def __init__(
        self,
        algorithm: Algorithm | None = None,
        *,
        key_resolver: KeyResolver | None = None,
    ) -> None:
        if algorithm is None and key_resolver is None:
            raise ValueError("JWTEncoder needs an algorithm or a key resolver")
        self.algorithm = algorithm
        self.key_resolver = key_resolver

    def encode(self, value: Any) -> bytes:
        return self.encode_to_string(value).encode("ascii")

    def encode_to_string(self, value: Any) -> str:
        """Return ``value`` as a compact token.

        Raises :class:`UnsupportedShapeError` for anything but a
        ``header``/``claims`` pair, :class:`InvalidKeyIDError` when no algorithm
        can be resolved and :class:`JWTEncodingError` when encoding or signing
        fails.
        """
        algorithm: Algorithm | None = None
        encoded_header: str | None = None
        encoded_claims: str | None = None

        for name, field in _fields(value):
            if name not in ("header", "claims") or field is None:
                raise UnsupportedShapeError(
                    "JWTEncoder can only encode JWT tokens", details={"field": name}
                )

            if name == "header":
                if not isinstance(field, Header):
                    raise JWTEncodingError(
                        "Failed to encode into header field",
                        details={"type": type(field).__name__},
                    )
                algorithm = resolve_algorithm(self.algorithm, self.key_resolver, field.kid)
                encoded_header = encode_segment(field.model_copy(update={"alg": algorithm.name}))
                if encoded_header is None:
                    raise JWTEncodingError("Failed to encode header")
            else:
                encoded_claims = encode_segment(_claims_payload(field))
                if encoded_claims is None:
                    raise JWTEncodingError("Failed to encode claims")

        if algorithm is None or encoded_header is None or encoded_claims is None:
            raise JWTEncodingError("Failed to sign JWT header and claims")

        token = sign_segments(encoded_header, encoded_claims, algorithm)
        if token is None:
            raise JWTEncodingError(
                "Failed to sign JWT header and claims", details={"alg": algorithm.name}
            )
        logger.debug("Encoded JWT", alg=algorithm.name)
        return token
