"""Error taxonomy for the EdDSA signing method.

Every error derives from one of PyJWT's own exception classes so that code
already handling ``jwt.exceptions`` treats EdDSA failures the same way it
treats failures from the built-in algorithms.
"""
from __future__ import annotations

from jwt.exceptions import (
    DecodeError,
    InvalidAlgorithmError,
    InvalidKeyError,
    InvalidSignatureError,
    PyJWTError,
)


class InvalidKeyTypeError(InvalidKeyError):
    """Raised when a key is not one of the accepted representations"""


class InvalidKeyLengthError(InvalidKeyError):
    """Raised when raw key bytes do not have the size Ed25519 requires"""

    def __init__(self, kind: str, expected: int, actual: int) -> None:
        super().__init__(f"Ed25519 {kind} key must be {expected} bytes, got {actual}")
        self.kind = kind
        self.expected = expected
        self.actual = actual


class MalformedSignatureError(DecodeError):
    """Raised when a signature segment is not valid base64url"""


class VerificationFailedError(InvalidSignatureError):
    """Raised when a well-formed signature does not match the message and key"""


class UnknownAlgorithmError(InvalidAlgorithmError):
    """Raised when no signing method is registered under a name"""


__all__ = [
    "PyJWTError",
    "InvalidKeyError",
    "InvalidKeyTypeError",
    "InvalidKeyLengthError",
    "MalformedSignatureError",
    "VerificationFailedError",
    "UnknownAlgorithmError",
]
