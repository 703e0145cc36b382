import pytest

from sleet.constants import EPOCH


class FakeClock:
    """Hands out the given milliseconds in order, then keeps repeating the last one."""

    def __init__(self, *timestamps):
        self.timestamps = list(timestamps)
        self.reads = 0

    def __call__(self):
        index = min(self.reads, len(self.timestamps) - 1)
        self.reads += 1
        return self.timestamps[index]


@pytest.fixture
def now():
    return EPOCH + 1_000_000


@pytest.fixture
def fake_clock():
    return FakeClock
