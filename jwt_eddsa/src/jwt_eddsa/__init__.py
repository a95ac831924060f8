"""EdDSA (Ed25519) signing method for PyJWT."""
from .algorithm import ALGORITHM, SIGNING_METHOD, EdDSAAlgorithm
from .exceptions import (
    InvalidKeyLengthError,
    InvalidKeyTypeError,
    MalformedSignatureError,
    UnknownAlgorithmError,
    VerificationFailedError,
)
from .keys import KeyPair, generate_key_pair, key_pair_from_seed
from .registry import get_signing_method, is_registered, new_jws, register, unregister
from .version import __version__

__all__ = [
    "ALGORITHM",
    "SIGNING_METHOD",
    "EdDSAAlgorithm",
    "InvalidKeyLengthError",
    "InvalidKeyTypeError",
    "MalformedSignatureError",
    "UnknownAlgorithmError",
    "VerificationFailedError",
    "KeyPair",
    "generate_key_pair",
    "key_pair_from_seed",
    "get_signing_method",
    "is_registered",
    "new_jws",
    "register",
    "unregister",
    "__version__",
]
