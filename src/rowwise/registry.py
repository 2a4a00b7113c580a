"""Process-wide registry of the host framework's registration functions.

Hosts register their primitives once, by well-known name::

    register_host("it", it)
    register_host("describe", describe)

:func:`rowwise.for_each` falls back to these entries when no function is
injected, looking them up only when a registrar is invoked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from rowwise.errors import RegistrationNotFoundError


logger = logging.getLogger(__name__)

TEST_FUNCTION = "it"
SUITE_FUNCTION = "describe"

_host_registry: dict[str, Any] = {}


def register_host(name: str, fn: Callable[..., Any]) -> Callable[..., Any]:
    """Register ``fn`` under ``name``, replacing any previous entry."""
    _host_registry[name] = fn
    return fn


def unregister_host(name: str) -> None:
    _host_registry.pop(name, None)


def get_host_registry() -> dict[str, Any]:
    """Get the global host registry."""
    return _host_registry


def clear_hosts() -> None:
    _host_registry.clear()


def get_host(name: str) -> Callable[..., Any]:
    """Return the registered callable for ``name``.

    Raises:
        RegistrationNotFoundError: If nothing callable is registered under ``name``.
    """
    fn = _host_registry.get(name)
    if not callable(fn):
        logger.debug("No callable host function registered as %r", name)
        raise RegistrationNotFoundError(name, fn)
    return fn


def get_variant(fn: Callable[..., Any], variant: str, name: str) -> Callable[..., Any]:
    """Return ``fn.<variant>`` (e.g. ``it.skip``), failing if it is not callable."""
    attr = getattr(fn, variant, None)
    if not callable(attr):
        raise RegistrationNotFoundError(f"{name}.{variant}", attr)
    return attr


@contextmanager
def host_scope(**fns: Callable[..., Any]) -> Iterator[None]:
    """Temporarily register host functions, restoring previous entries on exit."""
    missing = object()
    previous = {name: _host_registry.get(name, missing) for name in fns}
    _host_registry.update(fns)
    try:
        yield
    finally:
        for name, fn in previous.items():
            if fn is missing:
                _host_registry.pop(name, None)
            else:
                _host_registry[name] = fn


__all__ = [
    "SUITE_FUNCTION",
    "TEST_FUNCTION",
    "clear_hosts",
    "get_host",
    "get_host_registry",
    "get_variant",
    "host_scope",
    "register_host",
    "unregister_host",
]
