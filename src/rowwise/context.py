from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator


INVOCATION_CONTEXT: ContextVar[Any] = ContextVar("invocation_context", default=None)


def current_context() -> Any:
    """Return the context the host supplied to the running case body, if any."""
    return INVOCATION_CONTEXT.get()


@contextmanager
def invocation_context_scope(ctx: Any) -> Iterator[None]:
    token = INVOCATION_CONTEXT.set(ctx)
    try:
        yield
    finally:
        INVOCATION_CONTEXT.reset(token)


__all__ = ["INVOCATION_CONTEXT", "current_context", "invocation_context_scope"]
