"""The JOSE header of a JWT."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Header(BaseModel):
    """Registered JWT header parameters.

    ``typ`` defaults to ``"JWT"`` when a header is built by hand. ``alg`` is
    owned by the signing step: :meth:`jwtkit.jwt.JWT.sign` and the encoder
    overwrite it with the name of the algorithm they actually use, so any value
    set beforehand is only a placeholder.

    ``jku`` and ``x5u`` are carried verbatim; nothing is ever fetched from them.
    """

    model_config = ConfigDict(populate_by_name=True)

    typ: str | None = "JWT"
    alg: str | None = None
    jku: str | None = None
    jwk: str | None = None
    kid: str | None = None
    x5u: str | None = None
    x5c: list[str] | None = None
    x5t: str | None = None
    x5t_s256: str | None = Field(default=None, alias="x5tS256")
    cty: str | None = None
    crit: list[str] | None = None

    @classmethod
    def from_json_object(cls, obj: dict[str, Any]) -> Header:
        """Build a header from a decoded JSON object.

        Unlike the constructor this leaves ``typ`` unset when the token did not
        carry one. Parameters are read by their wire names only; unknown ones,
        including the Python attribute names, are dropped.
        """
        return cls.model_validate({"typ": None, **obj}, by_alias=True, by_name=False)
