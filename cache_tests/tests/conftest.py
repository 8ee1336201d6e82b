import pytest

from generic_cache import CacheBuilder


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    # Size 5, global timeout 2s, no background thread: sweeps are driven by calls.
    c = CacheBuilder(5, 2).cleanup_interval(1).clock(clock).without_reaper().build()
    yield c
    c.shutdown()
