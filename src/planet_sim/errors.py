# MIT License (see LICENSE)
"""
Exception types raised by the simulation kernel.

Configuration mistakes (bad timestep, unknown model name) are reported with
the built-in ValueError; the classes here cover errors that depend on the
simulation's runtime state.
"""
from __future__ import annotations


class SimulationError(Exception):
    """Base class for errors raised by planet_sim."""


class InvalidIndexError(SimulationError, IndexError):
    """
    A body index is out of range or refers to a removed body.

    Subclasses IndexError so callers that already guard list access keep
    working.
    """

    def __init__(self, index: int, reason: str = "no such body") -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid body index {index}: {reason}")
