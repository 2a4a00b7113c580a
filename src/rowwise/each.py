"""Expand one test body into one registered test case per parameter row.

Usage::

    from rowwise import for_each

    for_each([(1, 2, 3), (2, 3, 5)], it).it(
        "adds %d and %d",
        lambda a, b, expected: assert_equal(a + b, expected),
    )

``it`` is the host framework's registration function ``(title, body)``. When
omitted, the function registered as ``"it"`` in :mod:`rowwise.registry` is
looked up each time a registrar is called.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from typing import Any, NamedTuple, Union

from rowwise.arity import PLACEHOLDER, ArgumentPlan, declared_arity, resolve
from rowwise.config import RowwiseConfig, load_config
from rowwise.context import invocation_context_scope
from rowwise.registry import get_host, get_variant
from rowwise.rows import Row
from rowwise.titles import TitleTemplate, as_title_template, format_title


logger = logging.getLogger(__name__)

RegistrationFn = Callable[[Any, Callable[..., Any]], Any]
Title = Union[str, Callable[..., Any], TitleTemplate]


async def _await_in_context(ctx: Any, awaitable: Any) -> Any:
    with invocation_context_scope(ctx):
        return await awaitable


class CaseBody:
    """The body registered with the host for a single row.

    Calling it runs the test body with the row's arguments and returns the
    test body's result. The optional argument is the host's completion
    callback, forwarded into the reserved slot in asynchronous mode.

    Accessed through an instance (for hosts that attach bodies to classes) or
    invoked via :meth:`call`, the supplied context is exposed to the test body
    through :func:`rowwise.current_context`.
    """

    def __init__(
        self,
        test_body: Callable[..., Any],
        plan: ArgumentPlan,
        context: Any = None,
    ) -> None:
        self.test_body = test_body
        self.plan = plan
        self.context = context

    def __call__(self, done: Any = PLACEHOLDER) -> Any:
        return self.call(self.context, done)

    def __get__(self, instance: Any, owner: type | None = None) -> CaseBody:
        if instance is None:
            return self
        return CaseBody(self.test_body, self.plan, context=instance)

    def call(self, context: Any, done: Any = PLACEHOLDER) -> Any:
        """Run the test body with ``context`` as the invocation context."""
        args = self.plan.bind(done)
        with invocation_context_scope(context):
            result = self.test_body(*args)
        if context is not None and inspect.iscoroutine(result):
            return _await_in_context(context, result)
        return result

    def __repr__(self) -> str:
        return f"CaseBody({self.test_body!r}, values={self.plan.values!r})"


class GeneratedCase(NamedTuple):
    """A computed title and the body to register under it."""

    title: Any
    body: CaseBody


class Registrar:
    """``it``-style registrar with ``only`` and ``skip`` variants."""

    def __init__(self, each: Each) -> None:
        self._each = each

    def __call__(self, title: Title, test_body: Callable[..., Any]) -> None:
        register = self._each.resolve_test_function()
        self._each.register(register, title, test_body)

    def only(self, title: Title, test_body: Callable[..., Any]) -> None:
        """Register all rows inside one exclusive, untitled suite.

        The per-row registration is deferred until the host runs the suite,
        and then uses the ordinary (non-exclusive) registration function.
        """
        register = self._each.resolve_test_function()
        suite_only = get_variant(
            self._each.resolve_suite_function(), "only", self._each.config.suite_function
        )

        def run_suite() -> None:
            self._each.register(register, title, test_body)

        suite_only("", run_suite)

    def skip(self, title: Title, test_body: Callable[..., Any]) -> None:
        """Register every row through the host's ``skip`` variant."""
        register = self._each.resolve_test_function()
        skip = get_variant(register, "skip", self._each.config.test_function)
        self._each.register(skip, title, test_body)


class Each:
    """Parameter set bound to a host; :attr:`it` registers test cases.

    Args:
        parameter_set: Rows; each is a scalar or a list/tuple of values.
        it: Registration function. Defaults to the ambient one.
        describe: Suite function used by ``it.only``. Defaults to the ambient one.
        arity: Expected argument count, overriding inspection of the test body.
        async_mode: Force (``True``) or disable (``False``) the completion
            callback slot instead of inferring it from the arity.
        config: Settings. Defaults to :func:`rowwise.config.load_config`.
    """

    def __init__(
        self,
        parameter_set: Iterable[Row],
        it: RegistrationFn | None = None,
        *,
        describe: RegistrationFn | None = None,
        arity: int | None = None,
        async_mode: bool | None = None,
        config: RowwiseConfig | None = None,
    ) -> None:
        if arity is not None and arity < 0:
            raise ValueError(f"arity must be >= 0, got {arity}")
        self.parameter_set = tuple(parameter_set)
        self.arity = arity
        self.async_mode = async_mode
        self._it = it
        self._describe = describe
        self._config = config
        self.it = Registrar(self)

    @property
    def config(self) -> RowwiseConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    def resolve_test_function(self) -> RegistrationFn:
        if self._it is not None:
            return self._it
        return get_host(self.config.test_function)

    def resolve_suite_function(self) -> RegistrationFn:
        if self._describe is not None:
            return self._describe
        return get_host(self.config.suite_function)

    def cases(self, title: Title, test_body: Callable[..., Any]) -> list[GeneratedCase]:
        """Compute the title and body of every row without registering anything."""
        template = as_title_template(title)
        arity = self.arity if self.arity is not None else declared_arity(test_body)
        resolution = resolve(
            self.parameter_set,
            arity,
            async_mode=self.async_mode,
            strict=self.config.strict_arity,
        )
        return [
            GeneratedCase(format_title(template, index, plan.values), CaseBody(test_body, plan))
            for index, plan in enumerate(resolution.plans)
        ]

    def register(
        self,
        register: RegistrationFn,
        title: Title,
        test_body: Callable[..., Any],
    ) -> None:
        """Register every row's case through ``register``."""
        for index, case in enumerate(self.cases(title, test_body)):
            logger.debug("Registering case %d: %r", index, case.title)
            register(case.title, case.body)


def for_each(
    parameter_set: Iterable[Row],
    it: RegistrationFn | None = None,
    *,
    describe: RegistrationFn | None = None,
    arity: int | None = None,
    async_mode: bool | None = None,
    config: RowwiseConfig | None = None,
) -> Each:
    """Bind ``parameter_set`` to a host; see :class:`Each`."""
    return Each(
        parameter_set,
        it,
        describe=describe,
        arity=arity,
        async_mode=async_mode,
        config=config,
    )


__all__ = ["CaseBody", "Each", "GeneratedCase", "Registrar", "for_each"]
