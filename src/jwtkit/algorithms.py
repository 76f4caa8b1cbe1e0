"""Signing algorithms.

Every :class:`Algorithm` is bound to its key material at construction and
exposes the same contract:

* ``name``: the JOSE ``alg`` identifier written into the header;
* ``sign(data)``: the raw signature, or ``None`` when the key cannot sign;
* ``verify(signature, data)``: ``True`` or ``False``, never an exception.

The primitives come from PyJWT's JWA implementations (``cryptography`` for
the asymmetric families). Instances are immutable and may be shared between
threads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from cryptography.exceptions import UnsupportedAlgorithm
from jwt import algorithms as jwa
from jwt.exceptions import InvalidKeyError, PyJWTError

from jwtkit.errors import InvalidKeyIDError, UnsupportedAlgorithmError
from jwtkit.logging import get_logger

logger = get_logger(__name__)

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})
ASYMMETRIC_ALGORITHMS = frozenset(
    {
        "RS256",
        "RS384",
        "RS512",
        "PS256",
        "PS384",
        "PS512",
        "ES256",
        "ES384",
        "ES512",
        "EdDSA",
    }
)

_KEY_ERRORS = (InvalidKeyError, UnsupportedAlgorithm, ValueError, TypeError)


class Algorithm(ABC):
    """A signing strategy bound to fixed key material."""

    name: str

    @abstractmethod
    def sign(self, data: bytes) -> bytes | None: ...

    @abstractmethod
    def verify(self, signature: bytes, data: bytes) -> bool: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


KeyResolver = Callable[[str], Algorithm | None]


class NoneAlgorithm(Algorithm):
    """Unsecured JWS: no signature, and only an empty signature verifies."""

    name = "none"

    def sign(self, data: bytes) -> bytes | None:
        return b""

    def verify(self, signature: bytes, data: bytes) -> bool:
        return signature == b""


class _JWAAlgorithm(Algorithm):
    """Shared plumbing for algorithms backed by a PyJWT implementation."""

    def __init__(self, name: str) -> None:
        impl = jwa.get_default_algorithms().get(name)
        if impl is None:
            raise UnsupportedAlgorithmError(
                f"Algorithm {name!r} is not available", details={"alg": name}
            )
        self.name = name
        self._impl = impl

    def _prepare(self, key: Any, role: str) -> Any | None:
        try:
            return self._impl.prepare_key(key)
        except _KEY_ERRORS as exc:
            logger.warning("Unusable key material", alg=self.name, role=role, error=str(exc))
            return None


class HMACAlgorithm(_JWAAlgorithm):
    """HS256 / HS384 / HS512 with a shared secret."""

    def __init__(self, name: str, key: str | bytes) -> None:
        if name not in HMAC_ALGORITHMS:
            raise UnsupportedAlgorithmError(
                f"{name!r} is not an HMAC algorithm", details={"alg": name}
            )
        super().__init__(name)
        self._key = self._prepare(key, "secret")

    def sign(self, data: bytes) -> bytes | None:
        if self._key is None:
            return None
        return self._impl.sign(data, self._key)

    def verify(self, signature: bytes, data: bytes) -> bool:
        if self._key is None:
            return False
        return bool(self._impl.verify(data, self._key, signature))


class AsymmetricAlgorithm(_JWAAlgorithm):
    """RSA (PKCS#1 v1.5 and PSS), ECDSA and EdDSA.

    ``private_key`` is needed to sign, ``public_key`` to verify. When only the
    private key is given its public half is used for verification. Keys may be
    PEM ``str``/``bytes`` or ``cryptography`` key objects.
    """

    def __init__(
        self,
        name: str,
        *,
        private_key: Any | None = None,
        public_key: Any | None = None,
    ) -> None:
        if name not in ASYMMETRIC_ALGORITHMS:
            raise UnsupportedAlgorithmError(
                f"{name!r} is not an asymmetric algorithm", details={"alg": name}
            )
        super().__init__(name)

        self._private_key = None
        if private_key is not None:
            prepared = self._prepare(private_key, "private")
            if prepared is not None and not hasattr(prepared, "sign"):
                logger.warning("Public key given where a private key is needed", alg=name)
                prepared = None
            self._private_key = prepared

        self._public_key = None
        if public_key is not None:
            self._public_key = _public_half(self._prepare(public_key, "public"))
        elif self._private_key is not None:
            self._public_key = _public_half(self._private_key)

    def sign(self, data: bytes) -> bytes | None:
        if self._private_key is None:
            return None
        try:
            return self._impl.sign(data, self._private_key)
        except (ValueError, TypeError) as exc:
            logger.debug("Signing failed", alg=self.name, error=str(exc))
            return None

    def verify(self, signature: bytes, data: bytes) -> bool:
        if self._public_key is None:
            return False
        try:
            return bool(self._impl.verify(data, self._public_key, signature))
        except (PyJWTError, ValueError, TypeError) as exc:
            logger.debug("Verification error", alg=self.name, error=str(exc))
            return False


def _public_half(key: Any | None) -> Any | None:
    # Private key objects expose public_key(); public ones do not.
    if key is not None and hasattr(key, "public_key"):
        return key.public_key()
    return key


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def get_algorithm(
    name: str,
    *,
    key: str | bytes | None = None,
    private_key: Any | None = None,
    public_key: Any | None = None,
) -> Algorithm:
    """Build the algorithm registered under the JOSE name ``name``."""
    if name == NoneAlgorithm.name:
        return NoneAlgorithm()
    if name in HMAC_ALGORITHMS:
        if key is None:
            raise ValueError(f"{name} needs a shared secret")
        return HMACAlgorithm(name, key)
    if name in ASYMMETRIC_ALGORITHMS:
        return AsymmetricAlgorithm(name, private_key=private_key, public_key=public_key)
    raise UnsupportedAlgorithmError(f"Unknown algorithm {name!r}", details={"alg": name})


def hs256(key: str | bytes) -> Algorithm:
    return HMACAlgorithm("HS256", key)


def hs384(key: str | bytes) -> Algorithm:
    return HMACAlgorithm("HS384", key)


def hs512(key: str | bytes) -> Algorithm:
    return HMACAlgorithm("HS512", key)


def rs256(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("RS256", private_key=private_key, public_key=public_key)


def rs384(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("RS384", private_key=private_key, public_key=public_key)


def rs512(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("RS512", private_key=private_key, public_key=public_key)


def ps256(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("PS256", private_key=private_key, public_key=public_key)


def ps384(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("PS384", private_key=private_key, public_key=public_key)


def ps512(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("PS512", private_key=private_key, public_key=public_key)


def es256(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("ES256", private_key=private_key, public_key=public_key)


def es384(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("ES384", private_key=private_key, public_key=public_key)


def es512(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("ES512", private_key=private_key, public_key=public_key)


def eddsa(*, private_key: Any | None = None, public_key: Any | None = None) -> Algorithm:
    return AsymmetricAlgorithm("EdDSA", private_key=private_key, public_key=public_key)


# ---------------------------------------------------------------------------
# Key identifier resolution
# ---------------------------------------------------------------------------


def resolve_algorithm(
    algorithm: Algorithm | None,
    key_resolver: KeyResolver | None,
    kid: str | None,
) -> Algorithm:
    """Return ``algorithm`` if configured, otherwise look ``kid`` up.

    Raises :class:`InvalidKeyIDError` when there is no key id, no resolver, or
    the resolver does not know the key id.
    """
    if algorithm is not None:
        return algorithm
    if not kid or key_resolver is None:
        raise InvalidKeyIDError("Missing key identifier", details={"kid": kid})
    resolved = key_resolver(kid)
    if resolved is None:
        raise InvalidKeyIDError(f"No algorithm for key identifier {kid!r}", details={"kid": kid})
    return resolved
