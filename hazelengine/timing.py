"""Frame time steps and a simple wall-clock timer."""

from __future__ import annotations

import time


class Timestep(float):
    """A frame duration in seconds that behaves as a float."""

    def __new__(cls, time_seconds: float = 0.0) -> "Timestep":
        return super().__new__(cls, time_seconds)

    @property
    def seconds(self) -> float:
        return float(self)

    @property
    def milliseconds(self) -> float:
        return float(self) * 1000.0

    def __repr__(self) -> str:
        return f"Timestep({float(self)!r})"


class Timer:
    """Measures time elapsed since construction or the last reset."""

    def __init__(self) -> None:
        self._start = time.perf_counter_ns()

    def reset(self) -> None:
        self._start = time.perf_counter_ns()

    def elapsed(self) -> float:
        """Seconds since the last reset."""
        return (time.perf_counter_ns() - self._start) * 1e-9

    def elapsed_millis(self) -> float:
        """Milliseconds since the last reset."""
        return self.elapsed() * 1000.0