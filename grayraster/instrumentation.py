from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

PIXMEM = "pixmem"
CALIBRATION_LOOPS = 1_000_000


@dataclass(frozen=True)
class InstrumentationReport:
    elapsed: float
    caltime: float
    counts: Dict[str, int] = field(default_factory=dict)

    def format(self) -> str:
        header = "# {:>12} {:>12}".format("time", "caltime")
        values = "  {:>12.6f} {:>12.6f}".format(self.elapsed, self.caltime)
        for name, count in self.counts.items():
            header += " {:>12}".format(name)
            values += " {:>12d}".format(count)
        return header + "\n" + values


class Instrumentation:
    """Named operation counters plus a wall-clock timer."""

    def __init__(self, names: Iterable[str]) -> None:
        self._counts: Dict[str, int] = {name: 0 for name in names}
        self._started = time.perf_counter()
        self._time_unit: Optional[float] = None

    @property
    def names(self) -> List[str]:
        return list(self._counts)

    def add(self, name: str, amount: int = 1) -> None:
        self._counts[name] = self._counts.get(name, 0) + amount

    def count(self, name: str) -> int:
        return self._counts.get(name, 0)

    def calibrate(self, loops: int = CALIBRATION_LOOPS) -> float:
        """Time a reference loop and keep the per-iteration cost as time unit."""
        start = time.perf_counter()
        acc = 0
        for i in range(loops):
            acc += i
        elapsed = time.perf_counter() - start
        self._time_unit = elapsed / loops if loops else None
        return self._time_unit or 0.0

    def reset(self) -> None:
        for name in self._counts:
            self._counts[name] = 0
        self._started = time.perf_counter()

    def report(self) -> InstrumentationReport:
        elapsed = time.perf_counter() - self._started
        caltime = elapsed / self._time_unit if self._time_unit else elapsed
        return InstrumentationReport(elapsed, caltime, dict(self._counts))


INSTR = Instrumentation((PIXMEM,))


def init() -> float:
    """Calibrate the shared instrumentation. Call once at startup."""
    return INSTR.calibrate()
