"""Processing levels and run, subrun and event identifiers for art-style data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF


class Level(enum.Enum):
    """Nesting levels of processing; the outermost level is 0."""

    JOB = 0
    INPUT_FILE = 1
    RUN = 2
    SUB_RUN = 3
    EVENT = 4
    NUM_NESTING_LEVELS = 5
    READY_TO_ADVANCE = 6

    def __str__(self) -> str:
        if self is Level.NUM_NESTING_LEVELS:
            return str(self.value)
        return _LEVEL_NAMES[self]


_LEVEL_NAMES = {
    Level.JOB: "Job",
    Level.INPUT_FILE: "InputFile",
    Level.RUN: "Run",
    Level.SUB_RUN: "SubRun",
    Level.EVENT: "Event",
    Level.READY_TO_ADVANCE: "ReadyToAdvance",
}


def underlying_value(level: Level) -> int:
    return level.value


def highest_level() -> Level:
    return Level(0)


def level_up(level: Level) -> Level:
    """The level enclosing ``level``; ValueError above the highest level."""
    return Level(underlying_value(level) - 1)


def most_deeply_nested_level() -> Level:
    return level_up(Level.NUM_NESTING_LEVELS)


def level_down(level: Level) -> Level:
    """The level nested inside ``level``; ValueError below the last level."""
    return Level(underlying_value(level) + 1)


def is_above_most_deeply_nested_level(level: Level) -> bool:
    return underlying_value(level) < underlying_value(most_deeply_nested_level())


def is_most_deeply_nested_level(level: Level) -> bool:
    return level is most_deeply_nested_level()


def is_highest_level(level: Level) -> bool:
    return level is highest_level()


def is_level_contained_by(first: Level, second: Level) -> bool:
    """True when ``first`` is nested more deeply than ``second``."""
    return underlying_value(first) > underlying_value(second)


_FIRST_NUMBER = {Level.EVENT: 1, Level.SUB_RUN: 0, Level.RUN: 1}


class IDNumber:
    """Limits of the 32-bit identifier numbers used at one level."""

    def __init__(self, level: Level = Level.EVENT) -> None:
        if level not in _FIRST_NUMBER:
            raise ValueError(f"no identifier numbers at level {level}")
        self._level = level

    @property
    def level(self) -> Level:
        return self._level

    def invalid(self) -> int:
        return _UINT32_MASK

    def max_valid(self) -> int:
        return self.invalid() - 1

    def flush_value(self) -> int:
        return self.max_valid()

    def max_natural(self) -> int:
        return self.flush_value() - 1

    def first(self) -> int:
        return _FIRST_NUMBER[self._level]

    def next(self, number: int) -> int:
        """The number after ``number``; only event numbers have one."""
        if self._level is not Level.EVENT:
            raise ValueError(f"numbers at level {self._level} have no successor")
        return (number + 1) & _UINT32_MASK


def is_valid(number: int, level: Level = Level.EVENT) -> bool:
    return number != IDNumber(level).invalid()


@dataclass(frozen=True)
class RunID:
    run: int = IDNumber(Level.RUN).invalid()


@dataclass(frozen=True)
class SubRunID:
    run_id: RunID = field(default_factory=RunID)
    sub_run: int = IDNumber(Level.SUB_RUN).invalid()

    @property
    def run(self) -> int:
        return self.run_id.run


@dataclass(frozen=True)
class EventID:
    subrun_id: SubRunID = field(default_factory=SubRunID)
    event: int = IDNumber(Level.EVENT).invalid()

    @property
    def run(self) -> int:
        return self.subrun_id.run

    @property
    def sub_run(self) -> int:
        return self.subrun_id.sub_run


@dataclass(frozen=True)
class Timestamp:
    """A 64-bit time value stored as low and high 32-bit halves."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _UINT64_MASK:
            raise ValueError("timestamp value must fit in 64 unsigned bits")

    @property
    def time_low(self) -> int:
        return self.value & _UINT32_MASK

    @property
    def time_high(self) -> int:
        return self.value >> 32

    @classmethod
    def invalid_timestamp(cls) -> "Timestamp":
        return cls(0)


class ExperimentType(enum.IntEnum):
    ANY = 0
    ALIGN = 1
    CALIB = 2
    COSMIC = 3
    DATA = 4
    MC = 5
    RAW = 6
    TEST = 7


@dataclass(frozen=True)
class EventAuxiliary:
    event_id: EventID = field(default_factory=EventID)
    time: Timestamp = field(default_factory=Timestamp)
    is_real_data: bool = False
    experiment_type: ExperimentType = ExperimentType.ANY

    @property
    def run(self) -> int:
        return self.event_id.run

    @property
    def sub_run(self) -> int:
        return self.event_id.sub_run

    @property
    def event(self) -> int:
        return self.event_id.event