import time
from typing import Callable

# Returns the current instant in seconds
Clock = Callable[[], float]


def system_clock() -> float:
    return time.time()


class FakeClock:
    """Manually driven clock for deterministic phase timing."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now
