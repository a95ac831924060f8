"""Registration of the EdDSA signing method with PyJWT.

Registration is an explicit call rather than an import side effect so that
applications and test suites control when the algorithm table changes.

``jws=None`` targets PyJWT's module-level registry (the one used by
``jwt.api_jws.encode`` / ``decode``); any other :class:`jwt.PyJWS` instance
can be targeted directly.
"""
from __future__ import annotations

import threading
from typing import Callable, NamedTuple

import jwt
import structlog
from jwt import PyJWS
from jwt.algorithms import Algorithm, get_default_algorithms

from .algorithm import ALGORITHM, SIGNING_METHOD, EdDSAAlgorithm
from .exceptions import UnknownAlgorithmError

logger = structlog.get_logger(__name__)

_lock = threading.Lock()


class _Table(NamedTuple):
    register: Callable[[str, Algorithm], None]
    unregister: Callable[[str], None]
    lookup: Callable[[str], Algorithm]
    label: str


def _table(jws: PyJWS | None) -> _Table:
    if jws is None:
        return _Table(
            jwt.register_algorithm,
            jwt.unregister_algorithm,
            jwt.get_algorithm_by_name,
            "global",
        )
    return _Table(jws.register_algorithm, jws.unregister_algorithm, jws.get_algorithm_by_name, "instance")


def _current(table: _Table, name: str) -> Algorithm | None:
    try:
        return table.lookup(name)
    except NotImplementedError:
        return None


def register(jws: PyJWS | None = None) -> EdDSAAlgorithm:
    """Install the EdDSA signing method under ``"EdDSA"``.

    Calling this more than once is a no-op. A different handler already bound
    to the name, such as PyJWT's built-in OKP implementation, is replaced.
    """

    table = _table(jws)
    with _lock:
        current = _current(table, ALGORITHM)
        if current is SIGNING_METHOD:
            return SIGNING_METHOD
        if current is not None:
            table.unregister(ALGORITHM)
            logger.info(
                "eddsa.replace",
                registry=table.label,
                previous=type(current).__name__,
            )
        table.register(ALGORITHM, SIGNING_METHOD)
        logger.debug("eddsa.register", registry=table.label, alg=ALGORITHM)
    return SIGNING_METHOD


def unregister(jws: PyJWS | None = None, *, restore_default: bool = True) -> None:
    """Remove the EdDSA signing method if it is the installed handler.

    With ``restore_default`` PyJWT's own handler for the name, when it has
    one, is put back.
    """

    table = _table(jws)
    with _lock:
        if _current(table, ALGORITHM) is not SIGNING_METHOD:
            return
        table.unregister(ALGORITHM)
        logger.debug("eddsa.unregister", registry=table.label)
        if restore_default:
            default = get_default_algorithms().get(ALGORITHM)
            if default is not None:
                table.register(ALGORITHM, default)


def is_registered(jws: PyJWS | None = None) -> bool:
    return _current(_table(jws), ALGORITHM) is SIGNING_METHOD


def get_signing_method(name: str, jws: PyJWS | None = None) -> Algorithm:
    method = _current(_table(jws), name)
    if method is None:
        raise UnknownAlgorithmError(f"No signing method registered for {name!r}")
    return method


def new_jws() -> PyJWS:
    """Return a fresh :class:`PyJWS` whose only algorithm is EdDSA."""
    jws = PyJWS(algorithms=[])
    register(jws)
    return jws


__all__ = [
    "register",
    "unregister",
    "is_registered",
    "get_signing_method",
    "new_jws",
]
