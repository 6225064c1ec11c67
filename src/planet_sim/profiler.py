# MIT License (see LICENSE)
"""
Lightweight timing of simulation phases.

Simulation.step() wraps its phases ("integrate", "trails") in profiler
sections when a Profiler is attached; nothing is measured otherwise.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    sim.run(1000)
    profiler.log_summary()
"""
from __future__ import annotations
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass
class ProfileStats:
    """Raw timing samples (seconds) keyed by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def clear(self) -> None:
        self.samples.clear()

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * (sum(times) / n),
                "max_ms": 1e3 * max(times),
            }
        return out


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under `name`."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)

    def log_summary(self, level: int = logging.INFO) -> None:
        """Emit one log line per recorded section."""
        for name, s in sorted(self.stats.summary().items()):
            logger.log(level, "%s: n=%d mean=%.3fms max=%.3fms",
                       name, s["n"], s["mean_ms"], s["max_ms"])
