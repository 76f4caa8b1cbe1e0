"""Tests for the Claims model and its registered-claim accessors."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from jwtkit import ClaimValue, Claims
from jwtkit.claims import numeric_date


class UserClaims(Claims):
    name: str
    roles: ClaimValue | None = None


def test_unknown_claims_pass_through():
    claims = Claims(name="Kitura", nested={"a": [1, 2]}, flag=False)

    assert claims.get("name") == "Kitura"
    assert claims.get("nested") == {"a": [1, 2]}
    assert claims.get("flag") is False
    assert claims.get("missing", "default") == "default"
    assert "name" in claims
    assert "missing" not in claims


def test_subclass_fields_and_extras_are_both_reachable():
    claims = UserClaims(name="bob", roles=["admin"], iss="me")

    assert claims.get("name") == "bob"
    assert claims.get("roles") == ["admin"]
    assert claims.issuer == "me"
    assert claims.to_dict() == {"name": "bob", "roles": ["admin"], "iss": "me"}


def test_to_dict_leaves_out_unset_claims():
    assert Claims(iss="me", sub=None).to_dict() == {"iss": "me"}


def test_registered_identity_accessors():
    claims = Claims(iss="me", aud="api", azp="client", at_hash="hash")

    assert claims.issuer == "me"
    assert claims.audience == "api"
    assert claims.authorized_party == "client"
    assert claims.access_token_hash == "hash"
    assert Claims(aud=["a", "b"]).audience == ["a", "b"]
    assert Claims(aud=42).audience is None


def test_time_accessors_accept_numbers_and_numeric_strings():
    instant = datetime.fromtimestamp(1_700_000_000, UTC)

    assert Claims(exp=1_700_000_000).expires_at == instant
    assert Claims(exp="1700000000").expires_at == instant
    assert Claims(nbf=1_700_000_000.0).not_before == instant
    assert Claims(iat="1700000000.0").issued_at == instant
    assert Claims(exp="soon").expires_at is None
    assert Claims().expires_at is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (10, 10.0),
        (10.5, 10.5),
        ("10", 10.0),
        ("-1.5", -1.5),
        ("1e3", 1000.0),
        ("ten", None),
        (" 10", None),
        ("1_0", None),
        (True, None),
        ([10], None),
        (None, None),
        ("inf", None),
        ("1e999", None),
        (float("-inf"), None),
        (float("nan"), None),
        (10**400, None),
    ],
)
def test_numeric_date(value, expected):
    assert numeric_date(value) == expected
