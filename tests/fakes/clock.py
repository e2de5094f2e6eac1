"""Clock and sleep fakes for tests."""

from __future__ import annotations

from dataclasses import dataclass, field


def _empty_delays() -> list[float]:
    return []


@dataclass
class FakeClock:
    """Manually advanced monotonic clock."""

    now: float = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class RecordingSleeper:
    """Async sleep replacement that records delays and advances a clock."""

    clock: FakeClock | None = None
    delays: list[float] = field(default_factory=_empty_delays)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)
