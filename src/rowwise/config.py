"""Configuration loaded from ``[tool.rowwise]`` in ``pyproject.toml``."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from rowwise.errors import ConfigError
from rowwise.registry import SUITE_FUNCTION, TEST_FUNCTION


logger = logging.getLogger(__name__)

PYPROJECT = "pyproject.toml"
STRICT_ARITY_ENV = "ROWWISE_STRICT_ARITY"

_TRUTHY = {"1", "true", "yes", "on"}


class RowwiseConfig(BaseModel):
    """Settings shared by every :func:`rowwise.for_each` call.

    Attributes
    ----------
    strict_arity
        Raise instead of silently dropping row values the test body has no
        parameter for.
    test_function
        Registry name of the ambient per-test registration function.
    suite_function
        Registry name of the ambient suite function used by ``it.only``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    strict_arity: bool = False
    test_function: str = TEST_FUNCTION
    suite_function: str = SUITE_FUNCTION


def find_pyproject(start: Path | None = None) -> Path | None:
    """Return the nearest ``pyproject.toml`` at or above ``start``."""
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    return None


def _read_table(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(path, e) from e
    return data.get("tool", {}).get("rowwise", {})


def load_config(start: Path | str | None = None) -> RowwiseConfig:
    """Load configuration from the nearest ``pyproject.toml``.

    Args:
        start: File or directory to search from. Defaults to the current directory.

    Raises:
        ConfigError: If the file is not valid TOML or the table has unknown or
            ill-typed keys.
    """
    if isinstance(start, str):
        start = Path(start)

    path = find_pyproject(start)
    values: dict[str, Any] = _read_table(path) if path else {}

    env_strict = os.environ.get(STRICT_ARITY_ENV)
    if env_strict is not None:
        values["strict_arity"] = env_strict.strip().lower() in _TRUTHY

    try:
        config = RowwiseConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(path, e) from e

    logger.debug("Loaded rowwise config from %s: %r", path or "defaults", config)
    return config


__all__ = ["RowwiseConfig", "find_pyproject", "load_config"]
