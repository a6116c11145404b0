"""Lightweight timing probes that record durations between checkpoints."""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import datetime, timedelta
from statistics import fmean
from typing import TextIO

__all__ = ["Measurement", "Mgmt"]


class Measurement:
    """The durations recorded at one probe slot."""

    def __init__(self) -> None:
        self.probe: str | None = None
        self.milliseconds: list[int] = []
        self.microseconds: list[int] = []

    def log(self, probe_name: str, duration: timedelta) -> None:
        """Record ``duration``; the first name given labels the slot."""
        if self.probe is None:
            self.probe = probe_name
        micros = (duration.days * 86_400 + duration.seconds) * 1_000_000 + duration.microseconds
        self.microseconds.append(micros)
        self.milliseconds.append(int(micros / 1000))

    def do_print(self) -> bool:
        """True when something was recorded here."""
        return self.probe is not None

    def write(self, stream: TextIO | None = None) -> None:
        """Write the probe name and the mean duration in milliseconds."""
        if self.probe is None:
            return
        stream = sys.stdout if stream is None else stream
        stream.write(f"{self.probe}: {fmean(self.milliseconds):g}ms \n")


class Mgmt:
    """A fixed number of probe slots filled in order between resets."""

    def __init__(self, rsvp: int, clock: Callable[[], datetime] = datetime.now) -> None:
        if rsvp < 0:
            raise ValueError(f"number of probe slots must not be negative, got {rsvp}")
        self._clock = clock
        self.previous_time = clock()
        self.durations = [Measurement() for _ in range(rsvp)]
        self.reserved = rsvp
        self.idx = 0

    def reset_start_time(self) -> None:
        """Restart timing and go back to the first slot."""
        self.previous_time = self._clock()
        self.idx = 0

    def log(self, probe_name: str) -> None:
        """Record the time since the previous checkpoint in the next slot.

        Once every slot is used, further calls are ignored until a reset.
        """
        if self.idx >= self.reserved:
            return
        now = self._clock()
        duration = now - self.previous_time
        self.previous_time = now
        self.durations[self.idx].log(probe_name, duration)
        self.idx += 1

    def write(self, stream: TextIO | None = None) -> None:
        """Write every used slot, numbered from zero."""
        stream = sys.stdout if stream is None else stream
        used = (m for m in self.durations if m.do_print())
        for number, measurement in enumerate(used):
            stream.write(f"({number}) ")
            measurement.write(stream)