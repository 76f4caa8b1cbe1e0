"""jwtkit - sign, verify, decode and validate JSON Web Tokens."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Used only when running from source without installed package metadata.
__fallback_version__ = "0.1.0"

try:
    __version__ = _pkg_version("jwtkit")
except PackageNotFoundError:
    __version__ = __fallback_version__

from jwtkit.algorithms import (
    Algorithm,
    AsymmetricAlgorithm,
    HMACAlgorithm,
    KeyResolver,
    NoneAlgorithm,
    eddsa,
    es256,
    es384,
    es512,
    get_algorithm,
    hs256,
    hs384,
    hs512,
    ps256,
    ps384,
    ps512,
    rs256,
    rs384,
    rs512,
)
from jwtkit.claims import ClaimValue, Claims
from jwtkit.decoder import JWTDecoder, get_unverified_kid
from jwtkit.encoder import JWTEncoder
from jwtkit.errors import (
    InvalidJWTStringError,
    InvalidKeyIDError,
    JWTEncodingError,
    JWTError,
    UnsupportedAlgorithmError,
    UnsupportedShapeError,
    VerificationFailedError,
)
from jwtkit.header import Header
from jwtkit.jwt import JWT
from jwtkit.validation import ValidateClaimsResult, validate_claims

__all__ = [
    "JWT",
    "Algorithm",
    "AsymmetricAlgorithm",
    "ClaimValue",
    "Claims",
    "HMACAlgorithm",
    "Header",
    "InvalidJWTStringError",
    "InvalidKeyIDError",
    "JWTDecoder",
    "JWTEncoder",
    "JWTEncodingError",
    "JWTError",
    "KeyResolver",
    "NoneAlgorithm",
    "UnsupportedAlgorithmError",
    "UnsupportedShapeError",
    "ValidateClaimsResult",
    "VerificationFailedError",
    "__version__",
    "eddsa",
    "es256",
    "es384",
    "es512",
    "get_algorithm",
    "get_unverified_kid",
    "hs256",
    "hs384",
    "hs512",
    "ps256",
    "ps384",
    "ps512",
    "rs256",
    "rs384",
    "rs512",
    "validate_claims",
]
