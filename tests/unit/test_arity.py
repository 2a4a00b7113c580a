import pytest

from rowwise.arity import InvocationMode, declared_arity, infer_mode, resolve
from rowwise.errors import ArityMismatchError


def done():
    pass


def test_declared_arity_counts_positional_parameters():
    def body(a, b, /, c, *, d=None):
        pass

    assert declared_arity(body) == 3
    assert declared_arity(lambda: None) == 0
    assert declared_arity(lambda *args: None) is None

    class Suite:
        def method(self, a, b):
            pass

    assert declared_arity(Suite().method) == 2


async def async_body(n, done):
    pass


def test_declared_arity_of_coroutine_function():
    assert declared_arity(async_body) == 2


@pytest.mark.parametrize(
    "arity,longest,expected",
    [
        (4, 3, InvocationMode.ASYNC),
        (1, 0, InvocationMode.ASYNC),
        (4, 4, InvocationMode.SYNC),
        (5, 3, InvocationMode.SYNC),
        (2, 3, InvocationMode.SYNC),
        (None, 0, InvocationMode.SYNC),
    ],
)
def test_infer_mode_uses_slack_of_one(arity, longest, expected):
    assert infer_mode(arity, longest) is expected


def test_async_mode_places_callback_after_each_row():
    resolution = resolve([[1, 2], [3, 4, 5], [6]], 4)

    assert resolution.mode is InvocationMode.ASYNC
    assert [plan.bind(done) for plan in resolution.plans] == [
        [1, 2, done, None],
        [3, 4, 5, done],
        [6, done, None, None],
    ]


def test_sync_mode_pads_every_row_to_the_arity():
    resolution = resolve([[1, 2], [3, 4, 5, 6], [7]], 4)

    assert resolution.mode is InvocationMode.SYNC
    assert [plan.bind(done) for plan in resolution.plans] == [
        [1, 2, None, None],
        [3, 4, 5, 6],
        [7, None, None, None],
    ]


def test_sync_mode_truncates_long_rows_silently():
    resolution = resolve([[1, 2, 3]], 2)

    assert [plan.bind() for plan in resolution.plans] == [[1, 2]]


def test_strict_mode_rejects_long_rows():
    with pytest.raises(ArityMismatchError) as exc_info:
        resolve([[1], [1, 2, 3]], 2, strict=True)

    assert exc_info.value.row_index == 1
    assert exc_info.value.row_length == 3
    assert exc_info.value.arity == 2


def test_zero_or_unknown_arity_passes_values_unchanged():
    for arity in (0, None):
        resolution = resolve([[1, 2], 3], arity)
        assert [plan.bind() for plan in resolution.plans] == [[1, 2], [3]]


def test_explicit_async_mode_overrides_inference():
    forced = resolve([[1]], 3, async_mode=True)
    assert forced.mode is InvocationMode.ASYNC
    assert forced.plans[0].bind(done) == [1, done, None]

    disabled = resolve([[1]], 2, async_mode=False)
    assert disabled.mode is InvocationMode.SYNC
    assert disabled.plans[0].bind(done) == [1, None]


def test_empty_parameter_set_has_no_plans():
    resolution = resolve([], 3)

    assert len(resolution) == 0
    assert resolution.mode is InvocationMode.SYNC


def test_forced_async_mode_rejects_rows_without_a_callback_slot():
    with pytest.raises(ArityMismatchError, match="plus a completion callback") as exc_info:
        resolve([[1], [2, 3]], 2, async_mode=True)

    assert exc_info.value.row_index == 1
    assert exc_info.value.callback is True


def test_declared_arity_stops_at_first_defaulted_parameter():
    def body(a, b=5, c=None):
        pass

    def keyword_defaults(a, b, *, c=1):
        pass

    assert declared_arity(body) == 1
    assert declared_arity(keyword_defaults) == 2
    assert declared_arity(lambda a=1: None) == 0


def test_defaulted_parameters_do_not_trigger_async_mode():
    def body(a, b=5):
        pass

    resolution = resolve([[1]], declared_arity(body))

    assert resolution.mode is InvocationMode.SYNC
    assert resolution.plans[0].bind(done) == [1]
