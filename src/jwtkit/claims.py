"""The claim set carried in a JWT payload."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr

# Value shapes a claim may take. Decoded tokens may still carry any JSON value
# under unregistered names; those pass through untouched.
ClaimValue = StrictStr | StrictBool | StrictInt | StrictFloat | list[StrictStr]


def numeric_date(value: Any) -> float | None:
    """Parse a NumericDate given as a JSON number or a numeric string.

    Returns epoch seconds, or ``None`` when the value is not a finite number.
    Integers too large for a float, ``inf`` and ``nan`` are all rejected,
    whether given as numbers or as strings.
    """
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, int | float):
            seconds = float(value)
        elif isinstance(value, str):
            if value != value.strip() or "_" in value:
                return None
            seconds = float(value)
        else:
            return None
    except (OverflowError, ValueError):
        return None
    return seconds if math.isfinite(seconds) else None


def _to_datetime(value: Any) -> datetime | None:
    seconds = numeric_date(value)
    if seconds is None:
        return None
    try:
        return datetime.fromtimestamp(seconds, UTC)
    except (OverflowError, OSError, ValueError):
        return None


class Claims(BaseModel):
    """Open claim set.

    Any keyword becomes a claim::

        Claims(iss="issuer", aud=["svc"], exp=1700000000, name="Kitura")

    Applications wanting typed claims subclass it::

        class MyClaims(Claims):
            name: str
            admin: bool = False

    Unset claims (``None``) are left out of the encoded payload.
    """

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_json_object(cls, obj: dict[str, Any]) -> Claims:
        return cls.model_validate(obj)

    def get(self, name: str, default: Any = None) -> Any:
        if name in type(self).model_fields:
            value = getattr(self, name)
        else:
            value = (self.model_extra or {}).get(name)
        return default if value is None else value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    # -- registered claims --------------------------------------------------

    @property
    def issuer(self) -> str | None:
        value = self.get("iss")
        return value if isinstance(value, str) else None

    @property
    def audience(self) -> str | list[str] | None:
        """``aud`` as carried: a single string or a list of strings."""
        value = self.get("aud")
        if isinstance(value, str):
            return value
        if isinstance(value, list | tuple) and all(isinstance(v, str) for v in value):
            return list(value)
        return None

    @property
    def authorized_party(self) -> str | None:
        value = self.get("azp")
        return value if isinstance(value, str) else None

    @property
    def access_token_hash(self) -> str | None:
        value = self.get("at_hash")
        return value if isinstance(value, str) else None

    @property
    def expires_at(self) -> datetime | None:
        return _to_datetime(self.get("exp"))

    @property
    def not_before(self) -> datetime | None:
        return _to_datetime(self.get("nbf"))

    @property
    def issued_at(self) -> datetime | None:
        return _to_datetime(self.get("iat"))
