"""Ed25519 key material.

The signing method accepts a small closed set of key representations:

* raw bytes (``bytes``, ``bytearray`` or ``memoryview``): a 32-byte public key,
  or a 64-byte private key made of the 32-byte seed followed by its public key;
* cryptography's typed :class:`Ed25519PublicKey` / :class:`Ed25519PrivateKey`.

Everything is normalised here into fixed-length buffers or typed keys before
the primitive sees it, so a wrong-sized buffer becomes a clean
:class:`InvalidKeyLengthError` instead of a failure inside the primitive.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
    load_pem_private_key,
    load_pem_public_key,
)

from .exceptions import (
    InvalidKeyError,
    InvalidKeyLengthError,
    InvalidKeyTypeError,
    MalformedSignatureError,
)
from .utils.segments import decode_segment, encode_segment

PUBLIC_KEY_SIZE = 32
SEED_SIZE = 32
PRIVATE_KEY_SIZE = SEED_SIZE + PUBLIC_KEY_SIZE
SIGNATURE_SIZE = 64

RAW_KEY_TYPES = (bytes, bytearray, memoryview)
TYPED_KEY_TYPES = (Ed25519PrivateKey, Ed25519PublicKey)

KeyLike = Union[bytes, bytearray, memoryview, Ed25519PrivateKey, Ed25519PublicKey]


@dataclass(frozen=True, slots=True)
class KeyPair:
    """Raw Ed25519 key pair: 64-byte private key and 32-byte public key."""

    private: bytes
    public: bytes

    @property
    def seed(self) -> bytes:
        return self.private[:SEED_SIZE]


def is_supported_key(key: Any) -> bool:
    return isinstance(key, RAW_KEY_TYPES + TYPED_KEY_TYPES)


def _raw_public(key: Ed25519PublicKey) -> bytes:
    return key.public_bytes(Encoding.Raw, PublicFormat.Raw)


def _raw_private(key: Ed25519PrivateKey) -> bytes:
    seed = key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    return seed + _raw_public(key.public_key())


def _type_name(key: Any) -> str:
    return type(key).__name__


def private_key_bytes(key: Any) -> bytes:
    """Return the 64-byte raw private key for ``key``."""
    if isinstance(key, Ed25519PrivateKey):
        return _raw_private(key)
    if isinstance(key, RAW_KEY_TYPES):
        raw = bytes(key)
        if len(raw) != PRIVATE_KEY_SIZE:
            raise InvalidKeyLengthError("private", PRIVATE_KEY_SIZE, len(raw))
        return raw
    raise InvalidKeyTypeError(f"Expected an Ed25519 private key, got {_type_name(key)}")


def public_key_bytes(key: Any) -> bytes:
    """Return the 32-byte raw public key for ``key``."""
    if isinstance(key, Ed25519PublicKey):
        return _raw_public(key)
    if isinstance(key, RAW_KEY_TYPES):
        raw = bytes(key)
        if len(raw) != PUBLIC_KEY_SIZE:
            raise InvalidKeyLengthError("public", PUBLIC_KEY_SIZE, len(raw))
        return raw
    raise InvalidKeyTypeError(f"Expected an Ed25519 public key, got {_type_name(key)}")


def signing_key(key: Any) -> Ed25519PrivateKey:
    """Resolve ``key`` into a typed private key usable by the primitive.

    Raw private keys must embed the public key that belongs to their seed.
    """

    if isinstance(key, Ed25519PrivateKey):
        return key
    raw = private_key_bytes(key)
    private = Ed25519PrivateKey.from_private_bytes(raw[:SEED_SIZE])
    if _raw_public(private.public_key()) != raw[SEED_SIZE:]:
        raise InvalidKeyError("Embedded Ed25519 public key does not match the private seed")
    return private


def verifying_key(key: Any) -> Ed25519PublicKey:
    """Resolve ``key`` into a typed public key usable by the primitive."""
    if isinstance(key, Ed25519PublicKey):
        return key
    raw = public_key_bytes(key)
    try:
        return Ed25519PublicKey.from_public_bytes(raw)
    except ValueError as exc:
        raise InvalidKeyError(f"Invalid Ed25519 public key: {exc}") from exc


# ── Construction ──────────────────────────────────────────────────────────────

def key_pair_from_private_key(key: Any) -> KeyPair:
    private = signing_key(key)
    return KeyPair(private=_raw_private(private), public=_raw_public(private.public_key()))


def key_pair_from_seed(seed: bytes) -> KeyPair:
    if not isinstance(seed, RAW_KEY_TYPES):
        raise InvalidKeyTypeError(f"Expected seed bytes, got {_type_name(seed)}")
    if len(seed) != SEED_SIZE:
        raise InvalidKeyLengthError("seed", SEED_SIZE, len(seed))
    return key_pair_from_private_key(Ed25519PrivateKey.from_private_bytes(bytes(seed)))


def generate_key_pair() -> KeyPair:
    return key_pair_from_private_key(Ed25519PrivateKey.generate())


# ── PEM ───────────────────────────────────────────────────────────────────────

def load_private_key_pem(data: bytes, password: bytes | None = None) -> bytes:
    """Load a PKCS8 PEM private key and return its 64-byte raw form."""
    try:
        key = load_pem_private_key(data, password=password)
    except (TypeError, ValueError) as exc:
        raise InvalidKeyError(f"Could not load PEM private key: {exc}") from exc
    if not isinstance(key, Ed25519PrivateKey):
        raise InvalidKeyTypeError(f"PEM holds a {_type_name(key)}, not an Ed25519 private key")
    return _raw_private(key)


def load_public_key_pem(data: bytes) -> bytes:
    """Load a SubjectPublicKeyInfo PEM public key and return its 32 raw bytes."""
    try:
        key = load_pem_public_key(data)
    except ValueError as exc:
        raise InvalidKeyError(f"Could not load PEM public key: {exc}") from exc
    if not isinstance(key, Ed25519PublicKey):
        raise InvalidKeyTypeError(f"PEM holds a {_type_name(key)}, not an Ed25519 public key")
    return _raw_public(key)


def private_key_pem(key: Any, password: bytes | None = None) -> bytes:
    encryption = BestAvailableEncryption(password) if password else NoEncryption()
    return signing_key(key).private_bytes(Encoding.PEM, PrivateFormat.PKCS8, encryption)


def public_key_pem(key: Any) -> bytes:
    if isinstance(key, Ed25519PrivateKey) or (
        isinstance(key, RAW_KEY_TYPES) and len(key) == PRIVATE_KEY_SIZE
    ):
        public = signing_key(key).public_key()
    else:
        public = verifying_key(key)
    return public.public_bytes(Encoding.PEM, PublicFormat.SubjectPublicKeyInfo)


# ── JWK (RFC 8037) ────────────────────────────────────────────────────────────

def key_to_jwk(key: Any) -> Dict[str, str]:
    """Return the OKP JWK for ``key``; private keys include ``d``."""
    if isinstance(key, Ed25519PrivateKey) or (
        isinstance(key, RAW_KEY_TYPES) and len(key) == PRIVATE_KEY_SIZE
    ):
        pair = key_pair_from_private_key(key)
        return {
            "kty": "OKP",
            "crv": "Ed25519",
            "x": encode_segment(pair.public),
            "d": encode_segment(pair.seed),
        }
    return {"kty": "OKP", "crv": "Ed25519", "x": encode_segment(public_key_bytes(key))}


def _jwk_member(jwk: Mapping[str, Any], name: str) -> bytes:
    value = jwk.get(name)
    if not isinstance(value, str):
        raise InvalidKeyError(f"JWK member '{name}' is missing or not a string")
    try:
        return decode_segment(value)
    except MalformedSignatureError as exc:
        raise InvalidKeyError(f"JWK member '{name}' is not base64url") from exc


def key_from_jwk(jwk: str | Mapping[str, Any]) -> bytes:
    """Return raw key bytes from an OKP JWK.

    The result is the 64-byte private key when ``d`` is present and the
    32-byte public key otherwise.
    """

    if isinstance(jwk, str):
        try:
            jwk = json.loads(jwk)
        except ValueError as exc:
            raise InvalidKeyError("JWK is not valid JSON") from exc
    if not isinstance(jwk, Mapping):
        raise InvalidKeyError("JWK must be a JSON object")
    if jwk.get("kty") != "OKP":
        raise InvalidKeyError(f"Unsupported JWK key type: {jwk.get('kty')!r}")
    if jwk.get("crv") != "Ed25519":
        raise InvalidKeyError(f"Unsupported JWK curve: {jwk.get('crv')!r}")

    public = _jwk_member(jwk, "x")
    if len(public) != PUBLIC_KEY_SIZE:
        raise InvalidKeyLengthError("public", PUBLIC_KEY_SIZE, len(public))
    if "d" not in jwk:
        return public

    pair = key_pair_from_seed(_jwk_member(jwk, "d"))
    if pair.public != public:
        raise InvalidKeyError("JWK 'x' does not match the public key derived from 'd'")
    return pair.private


__all__ = [
    "PUBLIC_KEY_SIZE",
    "SEED_SIZE",
    "PRIVATE_KEY_SIZE",
    "SIGNATURE_SIZE",
    "RAW_KEY_TYPES",
    "TYPED_KEY_TYPES",
    "KeyLike",
    "KeyPair",
    "is_supported_key",
    "private_key_bytes",
    "public_key_bytes",
    "signing_key",
    "verifying_key",
    "key_pair_from_private_key",
    "key_pair_from_seed",
    "generate_key_pair",
    "load_private_key_pem",
    "load_public_key_pem",
    "private_key_pem",
    "public_key_pem",
    "key_to_jwk",
    "key_from_jwk",
]
