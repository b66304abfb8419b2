"""
Wall-clock timing for fits and searches.

Every Result carries a timing dict: 'total_seconds' for the whole call
plus one entry per named phase, e.g.

    {'total_seconds': 0.004, 'qr_decomposition': 0.001, 'solve': 0.0002}

for a single fit, or 'null_model' / 'candidate_fits' for forward
selection.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Total elapsed time plus accumulated time per phase.

    A phase entered several times (candidate fits across selection
    steps) sums its durations. Phases are measured independently of the
    total, so they need not add up to it.
    """

    def __init__(self):
        self._phases: dict[str, float] = {}
        self._t0: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._t0 = time.perf_counter()

    def stop(self) -> None:
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent in the with-block to phase `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + (time.perf_counter() - t0)

    def result(self) -> dict[str, float]:
        """
        Timing dict for a Result.

        Raises:
            RuntimeError: If the timer hasn't been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._phases}
