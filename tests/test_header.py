"""Tests for the Header model."""

from __future__ import annotations

import json

from jwtkit import Header, base64url
from jwtkit.jwt import encode_segment


def test_header_defaults_to_jwt_type_and_no_algorithm():
    header = Header()

    assert header.typ == "JWT"
    assert header.alg is None


def test_header_equality_is_structural():
    assert Header(kid="a", x5c=["c1"]) == Header(kid="a", x5c=["c1"])
    assert Header(kid="a") != Header(kid="b")
    assert Header(crit=["exp"]) != Header(crit=["nbf"])


def test_header_json_uses_wire_names_and_skips_unset_fields():
    header = Header(kid="k", x5t_s256="thumb", crit=["exp"])

    encoded = encode_segment(header)
    decoded = json.loads(base64url.decode(encoded))

    assert decoded == {"typ": "JWT", "kid": "k", "x5tS256": "thumb", "crit": ["exp"]}
    assert list(decoded) == ["typ", "kid", "x5tS256", "crit"]


def test_from_json_object_keeps_missing_typ_absent():
    header = Header.from_json_object({"alg": "HS256", "x5tS256": "t", "unknown": 1})

    assert header.typ is None
    assert header.alg == "HS256"
    assert header.x5t_s256 == "t"


def test_from_json_object_reads_wire_names_only():
    header = Header.from_json_object({"x5t_s256": "t"})

    assert header.x5t_s256 is None
    assert Header(x5t_s256="t") == Header.from_json_object({"typ": "JWT", "x5tS256": "t"})
