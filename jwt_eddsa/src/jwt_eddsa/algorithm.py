"""EdDSA signing method for PyJWT.

:class:`EdDSAAlgorithm` satisfies PyJWT's ``Algorithm`` plugin contract
(``prepare_key`` / ``sign`` / ``verify`` over raw bytes) and adds
segment-level helpers that work on the compact serialization directly:
``sign_segment`` returns the encoded signature for a signing input and
``verify_segment`` raises a typed error instead of returning ``False``.

The Ed25519 computation itself is done by ``cryptography``.
"""
from __future__ import annotations

import json
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from jwt.algorithms import Algorithm

from .exceptions import InvalidKeyTypeError, VerificationFailedError
from .keys import (
    KeyLike,
    is_supported_key,
    key_from_jwk,
    key_to_jwk,
    signing_key,
    verifying_key,
)
from .utils.segments import decode_segment, encode_segment

ALGORITHM = "EdDSA"


def _to_bytes(signing_input: str | bytes) -> bytes:
    if isinstance(signing_input, str):
        return signing_input.encode("utf-8")
    if isinstance(signing_input, (bytes, bytearray, memoryview)):
        return bytes(signing_input)
    raise TypeError(f"Signing input must be str or bytes, got {type(signing_input).__name__}")


class EdDSAAlgorithm(Algorithm):
    """Ed25519 signatures (RFC 8037) under the ``EdDSA`` algorithm name.

    Instances hold no state; a single shared instance is registered with
    PyJWT and may be used from any number of threads.
    """

    name = ALGORITHM

    @property
    def alg(self) -> str:
        return self.name

    def prepare_key(self, key: Any) -> KeyLike:
        if not is_supported_key(key):
            raise InvalidKeyTypeError(
                f"EdDSA keys must be raw bytes or Ed25519 key objects, got {type(key).__name__}"
            )
        return key

    def sign(self, msg: bytes, key: Any) -> bytes:
        if isinstance(key, Ed25519PublicKey):
            raise InvalidKeyTypeError("Signing requires an Ed25519 private key")
        return signing_key(key).sign(msg)

    def verify(self, msg: bytes, key: Any, sig: bytes) -> bool:
        if isinstance(key, Ed25519PrivateKey):
            raise InvalidKeyTypeError("Verification requires an Ed25519 public key")
        public = verifying_key(key)
        try:
            public.verify(sig, msg)
        except InvalidSignature:
            return False
        return True

    def sign_segment(self, signing_input: str | bytes, key: Any) -> str:
        """Sign ``header.payload`` and return the encoded signature segment."""
        signature = self.sign(_to_bytes(signing_input), self.prepare_key(key))
        return encode_segment(signature)

    def verify_segment(self, signing_input: str | bytes, signature: str | bytes, key: Any) -> None:
        """Check an encoded signature segment against ``header.payload``.

        Raises
        ------
        MalformedSignatureError
            ``signature`` is not base64url.
        InvalidKeyTypeError
            ``key`` is not an accepted public key representation.
        InvalidKeyLengthError
            raw ``key`` bytes are not 32 bytes long.
        VerificationFailedError
            the signature does not match.
        """

        raw_signature = decode_segment(signature)
        if not self.verify(_to_bytes(signing_input), self.prepare_key(key), raw_signature):
            raise VerificationFailedError("Ed25519 signature verification failed")

    @staticmethod
    def to_jwk(key_obj: Any, as_dict: bool = False) -> Dict[str, str] | str:
        jwk = key_to_jwk(key_obj)
        if as_dict:
            return jwk
        return json.dumps(jwk)

    @staticmethod
    def from_jwk(jwk: str | Dict[str, Any]) -> bytes:
        return key_from_jwk(jwk)


SIGNING_METHOD = EdDSAAlgorithm()

__all__ = ["ALGORITHM", "EdDSAAlgorithm", "SIGNING_METHOD"]
