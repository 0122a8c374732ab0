"""Run, luminosity block and event numbers that identify an event."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EventIdentifier:
    run: int
    lumi: int
    event: int


EventIdentifiers = list[EventIdentifier]