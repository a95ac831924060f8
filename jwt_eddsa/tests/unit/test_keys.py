import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from jwt_eddsa.exceptions import InvalidKeyError, InvalidKeyLengthError, InvalidKeyTypeError
from jwt_eddsa.keys import (
    PRIVATE_KEY_SIZE,
    PUBLIC_KEY_SIZE,
    generate_key_pair,
    key_from_jwk,
    key_pair_from_seed,
    load_private_key_pem,
    load_public_key_pem,
    private_key_bytes,
    private_key_pem,
    public_key_bytes,
    public_key_pem,
)
from jwt_eddsa.utils.segments import encode_segment

from vectors import PRIVATE, PUBLIC, SEED


def test_generate_key_pair_sizes() -> None:
    pair = generate_key_pair()
    assert len(pair.private) == PRIVATE_KEY_SIZE
    assert len(pair.public) == PUBLIC_KEY_SIZE
    assert pair.private[32:] == pair.public
    assert generate_key_pair().private != pair.private


def test_key_pair_from_seed_matches_vector() -> None:
    pair = key_pair_from_seed(SEED)
    assert pair.private == PRIVATE
    assert pair.public == PUBLIC
    assert pair.seed == SEED


def test_key_pair_from_seed_rejects_bad_seed() -> None:
    with pytest.raises(InvalidKeyLengthError):
        key_pair_from_seed(SEED[:16])
    with pytest.raises(InvalidKeyTypeError):
        key_pair_from_seed("seed")  # type: ignore[arg-type]


def test_raw_key_normalisation() -> None:
    assert private_key_bytes(bytearray(PRIVATE)) == PRIVATE
    assert public_key_bytes(memoryview(PUBLIC)) == PUBLIC
    with pytest.raises(InvalidKeyLengthError):
        private_key_bytes(PUBLIC)
    with pytest.raises(InvalidKeyTypeError):
        public_key_bytes("x" * 32)


def test_pem_round_trip() -> None:
    assert load_private_key_pem(private_key_pem(PRIVATE)) == PRIVATE
    assert load_public_key_pem(public_key_pem(PUBLIC)) == PUBLIC
    assert load_public_key_pem(public_key_pem(PRIVATE)) == PUBLIC


def test_encrypted_pem_round_trip() -> None:
    pem = private_key_pem(PRIVATE, password=b"hunter2")
    assert b"ENCRYPTED" in pem
    assert load_private_key_pem(pem, password=b"hunter2") == PRIVATE
    with pytest.raises(InvalidKeyError):
        load_private_key_pem(pem, password=b"wrong")


def test_pem_of_another_algorithm_is_rejected() -> None:
    key = ec.generate_private_key(ec.SECP256R1())
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    with pytest.raises(InvalidKeyTypeError):
        load_private_key_pem(private_pem)
    with pytest.raises(InvalidKeyTypeError):
        load_public_key_pem(public_pem)


def test_garbage_pem_is_rejected() -> None:
    with pytest.raises(InvalidKeyError):
        load_public_key_pem(b"not a pem")


@pytest.mark.parametrize(
    "jwk",
    [
        '{"kty": "OKP"',
        "[]",
        {"kty": "EC", "crv": "Ed25519", "x": "11qYAYKxCrfVS_7TyWQHOg7hcvPapiMlrwIaaPcHURo"},
        {"kty": "OKP", "crv": "X25519", "x": "11qYAYKxCrfVS_7TyWQHOg7hcvPapiMlrwIaaPcHURo"},
        {"kty": "OKP", "crv": "Ed25519"},
        {"kty": "OKP", "crv": "Ed25519", "x": "***"},
        {"kty": "OKP", "crv": "Ed25519", "x": "aGk"},
    ],
)
def test_invalid_jwk(jwk) -> None:
    with pytest.raises(InvalidKeyError):
        key_from_jwk(jwk)


def test_jwk_with_mismatched_public_key() -> None:
    other = generate_key_pair()
    jwk = {
        "kty": "OKP",
        "crv": "Ed25519",
        "x": "11qYAYKxCrfVS_7TyWQHOg7hcvPapiMlrwIaaPcHURo",
        "d": encode_segment(other.seed),
    }
    with pytest.raises(InvalidKeyError):
        key_from_jwk(jwk)
