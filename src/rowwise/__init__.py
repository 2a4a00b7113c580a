"""rowwise - one test case per parameter row, for any ``it``-style host."""

from .arity import ArgumentPlan, InvocationMode, Resolution, declared_arity, resolve
from .config import RowwiseConfig, load_config
from .context import current_context
from .each import CaseBody, Each, GeneratedCase, Registrar, for_each
from .errors import (
    ArityMismatchError,
    ConfigError,
    RegistrationNotFoundError,
    RowwiseError,
)
from .registry import clear_hosts, get_host, host_scope, register_host, unregister_host
from .rows import normalize
from .titles import FormatTitle, TitleFunction, TitleTemplate, format_title
from .version import __version__


__all__ = [
    # Core
    "for_each",
    "Each",
    "Registrar",
    "CaseBody",
    "GeneratedCase",
    "current_context",
    # Expansion engine
    "normalize",
    "declared_arity",
    "resolve",
    "ArgumentPlan",
    "InvocationMode",
    "Resolution",
    "FormatTitle",
    "TitleFunction",
    "TitleTemplate",
    "format_title",
    # Hosts
    "register_host",
    "unregister_host",
    "get_host",
    "clear_hosts",
    "host_scope",
    # Configuration
    "RowwiseConfig",
    "load_config",
    # Errors
    "RowwiseError",
    "RegistrationNotFoundError",
    "ArityMismatchError",
    "ConfigError",
]
