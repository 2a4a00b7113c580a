"""Arity inspection and per-row argument planning.

The test body's declared positional parameter count is compared against the
longest row once for the whole parameter set:

- ``arity - longest == 1``: asynchronous mode. The extra parameter is the slot
  for the host's completion callback, placed right after each row's values.
- anything else: synchronous mode. Each row is truncated or padded with
  ``None`` to exactly ``arity`` values.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rowwise.errors import ArityMismatchError
from rowwise.rows import Row, Values, longest, normalize_all


logger = logging.getLogger(__name__)

PLACEHOLDER = None

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class InvocationMode(Enum):
    """How the test body is called for every row."""

    SYNC = "sync"
    ASYNC = "async"


def declared_arity(fn: Callable[..., Any]) -> int | None:
    """Return the number of required positional parameters ``fn`` declares.

    Counting stops at the first positional parameter with a default, so
    defaulted parameters keep their defaults instead of receiving padding.

    Returns ``None`` when the count is unknown: the callable accepts ``*args``
    or its signature cannot be inspected.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None

    params = signature.parameters.values()
    if any(param.kind is inspect.Parameter.VAR_POSITIONAL for param in params):
        return None

    count = 0
    for param in params:
        if param.kind not in _POSITIONAL_KINDS:
            continue
        if param.default is not inspect.Parameter.empty:
            break
        count += 1
    return count


@dataclass(frozen=True)
class ArgumentPlan:
    """Recipe for the final argument list of one row.

    Attributes
    ----------
    values
        The normalized row values.
    arity
        Declared arity of the test body, ``None`` when unknown.
    callback_slot
        Position of the completion callback, ``None`` in synchronous mode.
    """

    values: Values
    arity: int | None
    callback_slot: int | None = None

    def bind(self, done: Any = PLACEHOLDER) -> list[Any]:
        """Build the positional arguments, forwarding ``done`` if a slot exists."""
        if self.callback_slot is not None:
            args = [*self.values, done]
            if self.arity is not None:
                args.extend([PLACEHOLDER] * (self.arity - len(args)))
            return args

        if not self.arity:
            return list(self.values)
        args = list(self.values[: self.arity])
        args.extend([PLACEHOLDER] * (self.arity - len(args)))
        return args


@dataclass(frozen=True)
class Resolution:
    """Invocation mode and argument plans for a whole parameter set."""

    mode: InvocationMode
    plans: tuple[ArgumentPlan, ...]

    def __len__(self) -> int:
        return len(self.plans)


def infer_mode(arity: int | None, longest_row: int) -> InvocationMode:
    """Asynchronous iff the body declares exactly one parameter past the longest row."""
    if arity is None:
        return InvocationMode.SYNC
    slack = arity - longest_row
    return InvocationMode.ASYNC if slack == 1 else InvocationMode.SYNC


def resolve(
    rows: Sequence[Row],
    arity: int | None,
    *,
    async_mode: bool | None = None,
    strict: bool = False,
) -> Resolution:
    """Plan the arguments of every row against the body's arity.

    Args:
        rows: The parameter set.
        arity: Declared positional parameter count, ``None`` when unknown.
        async_mode: Force asynchronous (``True``) or synchronous (``False``)
            mode instead of inferring it.
        strict: Raise :class:`ArityMismatchError` instead of truncating rows
            longer than ``arity`` in synchronous mode.

    Returns:
        The :class:`Resolution`; empty when ``rows`` is empty.

    Raises:
        ArityMismatchError: In strict mode, or when asynchronous mode is forced
            and a row leaves no parameter free for the completion callback.
    """
    normalized = normalize_all(rows)
    longest_row = longest(normalized)

    if async_mode is None:
        mode = infer_mode(arity, longest_row)
    else:
        mode = InvocationMode.ASYNC if async_mode else InvocationMode.SYNC

    logger.debug(
        "Resolved %s mode for %d rows (arity=%s, longest=%d)",
        mode.value,
        len(normalized),
        arity,
        longest_row,
    )

    plans: list[ArgumentPlan] = []
    for index, values in enumerate(normalized):
        if mode is InvocationMode.ASYNC:
            if arity is not None and len(values) + 1 > arity:
                raise ArityMismatchError(index, len(values), arity, callback=True)
            plans.append(ArgumentPlan(values=values, arity=arity, callback_slot=len(values)))
            continue

        if strict and arity and len(values) > arity:
            raise ArityMismatchError(index, len(values), arity)
        plans.append(ArgumentPlan(values=values, arity=arity))

    return Resolution(mode=mode, plans=tuple(plans))


__all__ = [
    "PLACEHOLDER",
    "ArgumentPlan",
    "InvocationMode",
    "Resolution",
    "declared_arity",
    "infer_mode",
    "resolve",
]
