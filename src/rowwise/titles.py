"""Test titles from format strings or title functions.

Format strings use a small ``%`` mini-language, consumed left to right, one
value per specifier:

- ``%d`` / ``%i``: integer decimal
- ``%s``: ``str()`` of the value
- ``%j``: compact JSON
- ``%%``: a literal ``%``

Specifiers without a matching value and unknown ``%`` sequences are kept as
literal text.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union


logger = logging.getLogger(__name__)

_SPECIFIER = re.compile(r"%([dijs%])")


@dataclass(frozen=True)
class FormatTitle:
    """Title rendered from a ``%``-style pattern."""

    pattern: str

    def render(self, values: Sequence[Any]) -> str:
        return render_pattern(self.pattern, values)


@dataclass(frozen=True)
class TitleFunction:
    """Title produced by calling ``fn(*values)``; the result is used verbatim."""

    fn: Callable[..., Any]

    def render(self, values: Sequence[Any]) -> Any:
        return self.fn(*values)


TitleTemplate = Union[FormatTitle, TitleFunction]


def as_title_template(template: str | Callable[..., Any] | TitleTemplate) -> TitleTemplate:
    """Coerce a plain string or callable into a :data:`TitleTemplate`."""
    if isinstance(template, (FormatTitle, TitleFunction)):
        return template
    if isinstance(template, str):
        return FormatTitle(template)
    if callable(template):
        return TitleFunction(template)
    msg = f"Title must be a string or a callable, got {type(template).__name__}"
    raise TypeError(msg)


def format_title(template: TitleTemplate, index: int, values: Sequence[Any]) -> Any:
    """Render the title of row ``index`` from its normalized values."""
    title = template.render(values)
    logger.debug("Rendered title for row %d: %r", index, title)
    return title


def render_pattern(pattern: str, values: Sequence[Any]) -> str:
    remaining = iter(values)
    supplied = len(values)
    consumed = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal consumed
        conversion = match.group(1)
        if conversion == "%":
            return "%"
        if consumed >= supplied:
            return match.group(0)
        consumed += 1
        value = next(remaining)
        if conversion in ("d", "i"):
            return _format_integer(value)
        if conversion == "j":
            return _format_json(value)
        return str(value)

    return _SPECIFIER.sub(substitute, pattern)


def _format_integer(value: Any) -> str:
    if isinstance(value, int):
        return str(int(value))
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "NaN"
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    return str(int(number))


def _dumps(value: Any, allow_nan: bool = True) -> str:
    return json.dumps(
        value,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=allow_nan,
        default=str,
    )


def _without_non_finite(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _without_non_finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_without_non_finite(item) for item in value]
    return value


def _format_json(value: Any) -> str:
    try:
        try:
            return _dumps(value, allow_nan=False)
        except ValueError:
            # non-finite floats (rendered as null) or a reference cycle
            _dumps(value)
            return _dumps(_without_non_finite(value))
    except TypeError:
        # default= is never applied to dict keys
        return str(value)
    except ValueError:
        return "[Circular]"


__all__ = [
    "FormatTitle",
    "TitleFunction",
    "TitleTemplate",
    "as_title_template",
    "format_title",
    "render_pattern",
]
