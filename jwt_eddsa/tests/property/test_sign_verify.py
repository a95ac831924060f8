import pytest
from hypothesis import given, settings, strategies as st

from jwt_eddsa import SIGNING_METHOD, VerificationFailedError, key_pair_from_seed
from jwt_eddsa.utils.segments import decode_segment, encode_segment

_seeds = st.binary(min_size=32, max_size=32)
_inputs = st.text(min_size=0, max_size=256)


@given(_seeds, _inputs)
def test_sign_then_verify(seed: bytes, signing_input: str) -> None:
    pair = key_pair_from_seed(seed)
    signature = SIGNING_METHOD.sign_segment(signing_input, pair.private)
    SIGNING_METHOD.verify_segment(signing_input, signature, pair.public)


@given(_seeds, _inputs)
def test_signing_is_deterministic(seed: bytes, signing_input: str) -> None:
    pair = key_pair_from_seed(seed)
    first = SIGNING_METHOD.sign_segment(signing_input, pair.private)
    assert first == SIGNING_METHOD.sign_segment(signing_input, pair.private)
    assert len(decode_segment(first)) == 64
    assert "=" not in first


@settings(max_examples=50)
@given(_seeds, st.binary(min_size=1, max_size=128), st.data())
def test_flipping_a_message_bit_fails(seed: bytes, message: bytes, data: st.DataObject) -> None:
    pair = key_pair_from_seed(seed)
    signature = SIGNING_METHOD.sign_segment(message, pair.private)
    bit = data.draw(st.integers(min_value=0, max_value=len(message) * 8 - 1))
    tampered = bytearray(message)
    tampered[bit // 8] ^= 1 << (bit % 8)
    with pytest.raises(VerificationFailedError):
        SIGNING_METHOD.verify_segment(bytes(tampered), signature, pair.public)


@settings(max_examples=50)
@given(_seeds, st.integers(min_value=0, max_value=511))
def test_flipping_a_signature_bit_fails(seed: bytes, bit: int) -> None:
    pair = key_pair_from_seed(seed)
    raw = bytearray(decode_segment(SIGNING_METHOD.sign_segment("header.payload", pair.private)))
    raw[bit // 8] ^= 1 << (bit % 8)
    with pytest.raises(VerificationFailedError):
        SIGNING_METHOD.verify_segment("header.payload", encode_segment(bytes(raw)), pair.public)
