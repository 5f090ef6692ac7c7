import pytest

from slice_reader.core.utils.backoff import BackoffStrategy, get_backoff_delay


def test_fixed_is_default():
    assert [get_backoff_delay(n, base=1.0) for n in range(4)] == [1.0] * 4


@pytest.mark.parametrize(
    "strategy,expected",
    [
        (BackoffStrategy.EXPONENTIAL, [0.5, 1.0, 2.0, 4.0]),
        (BackoffStrategy.LINEAR, [0.5, 1.0, 1.5, 2.0]),
    ],
)
def test_strategies(strategy, expected):
    assert [
        get_backoff_delay(n, base=0.5, strategy=strategy) for n in range(4)
    ] == expected


def test_delay_is_clamped():
    assert (
        get_backoff_delay(20, base=1.0, max_seconds=3.0, strategy=BackoffStrategy.EXPONENTIAL)
        == 3.0
    )


def test_jitter_stays_in_range():
    for _ in range(50):
        delay = get_backoff_delay(0, base=1.0, jitter=0.2)
        assert 0.8 <= delay <= 1.2
