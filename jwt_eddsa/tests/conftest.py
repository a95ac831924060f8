import pytest

from jwt_eddsa import register, unregister
from vectors import PRIVATE, PUBLIC


@pytest.fixture
def private_key() -> bytes:
    return PRIVATE


@pytest.fixture
def public_key() -> bytes:
    return PUBLIC


@pytest.fixture
def global_registration():
    method = register()
    yield method
    unregister()
