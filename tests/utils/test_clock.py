import pytest
from unittest.mock import MagicMock

from concurrency_perf.utils.clock import Clock, TimingUnavailable

MS = 1_000_000


def test_absolute_millis_truncates_nanoseconds() -> None:
    clock = Clock(source=lambda: 0)
    assert clock.absolute_millis(12 * MS + 999_999) == 12
    assert clock.absolute_millis(0) == 0


def test_elapsed_millis() -> None:
    source = MagicMock(side_effect=[1_000 * MS, 1_250 * MS])
    clock = Clock(source=source)
    start = clock.now()
    assert clock.elapsed_millis(start) == 250


def test_elapsed_millis_clock_going_backwards() -> None:
    """A reading earlier than the start instant is a fatal timing error, never a negative duration."""
    source = MagicMock(side_effect=[1_000 * MS, 900 * MS])
    clock = Clock(source=source)
    start = clock.now()
    with pytest.raises(TimingUnavailable):
        clock.elapsed_millis(start)


def test_negative_reading() -> None:
    clock = Clock(source=lambda: -1)
    with pytest.raises(TimingUnavailable):
        clock.now()


def test_negative_instant() -> None:
    with pytest.raises(TimingUnavailable):
        Clock().absolute_millis(-5)


def test_source_failure_is_wrapped() -> None:
    source = MagicMock(side_effect=OSError("clock_gettime failed"))
    with pytest.raises(TimingUnavailable, match="clock_gettime failed"):
        Clock(source=source).now()


def test_default_source_is_monotonic() -> None:
    clock = Clock()
    first = clock.now()
    second = clock.now()
    assert second >= first
    assert clock.elapsed_millis(first) >= 0


def test_millis_between() -> None:
    clock = Clock(source=lambda: 0)
    assert clock.millis_between(2 * MS, 9 * MS + 500) == 7
    with pytest.raises(TimingUnavailable):
        clock.millis_between(9 * MS, 2 * MS)
