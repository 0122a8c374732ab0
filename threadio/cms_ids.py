"""Run, luminosity block and event identifiers for CMS-style data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF

INVALID_EVENT_NUMBER = 0
INVALID_LUMINOSITY_BLOCK_NUMBER = 0
INVALID_RUN_NUMBER = 0


class HashedTypes(enum.IntEnum):
    MODULE_DESCRIPTION_TYPE = 0
    PARAMETER_SET_TYPE = 1
    PROCESS_HISTORY_TYPE = 2
    PROCESS_CONFIGURATION_TYPE = 3
    ENTRY_DESCRIPTION_TYPE = 4
    PARENTAGE_TYPE = 5


@dataclass(frozen=True, order=True)
class RunID:
    run: int = INVALID_RUN_NUMBER

    def next(self) -> "RunID":
        return RunID((self.run + 1) & _UINT32_MASK)

    def previous(self) -> "RunID":
        if self.run != 0:
            return RunID(self.run - 1)
        return RunID(0)

    @staticmethod
    def max_run_number() -> int:
        return _UINT32_MASK

    @classmethod
    def first_valid_run(cls) -> "RunID":
        return cls(1)


@dataclass(frozen=True, order=True)
class EventID:
    """Ordered by run, then luminosity block, then event."""

    run: int = INVALID_RUN_NUMBER
    luminosity_block: int = INVALID_LUMINOSITY_BLOCK_NUMBER
    event: int = INVALID_EVENT_NUMBER

    def next(self, lumi: int) -> "EventID":
        if self.event != self.max_event_number():
            return EventID(self.run, lumi, self.event + 1)
        return EventID((self.run + 1) & _UINT32_MASK, lumi, 1)

    def next_run(self, lumi: int) -> "EventID":
        return EventID((self.run + 1) & _UINT32_MASK, lumi, 0)

    def next_run_first_event(self, lumi: int) -> "EventID":
        return EventID((self.run + 1) & _UINT32_MASK, lumi, 1)

    def previous_run_last_event(self, lumi: int) -> "EventID":
        if self.run > 1:
            return EventID(self.run - 1, lumi, self.max_event_number())
        return EventID()

    def previous(self, lumi: int) -> "EventID":
        if self.event > 1:
            return EventID(self.run, lumi, self.event - 1)
        if self.run != 0:
            return EventID(self.run - 1, lumi, self.max_event_number())
        return EventID()

    @staticmethod
    def max_run_number() -> int:
        return _UINT32_MASK

    @staticmethod
    def max_luminosity_block_number() -> int:
        return _UINT32_MASK

    @staticmethod
    def max_event_number() -> int:
        return _UINT64_MASK

    @classmethod
    def first_valid_event(cls) -> "EventID":
        return cls(1, 1, 1)


@dataclass(frozen=True, order=True)
class Timestamp:
    """A 64-bit time: seconds since the epoch above, microseconds below."""

    value: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _UINT64_MASK:
            raise ValueError("timestamp value must fit in 64 unsigned bits")

    @property
    def unix_time(self) -> int:
        return self.value >> 32

    @property
    def microsecond_offset(self) -> int:
        return self.value & _UINT32_MASK

    @classmethod
    def invalid_timestamp(cls) -> "Timestamp":
        return cls(0)

    @classmethod
    def end_of_time(cls) -> "Timestamp":
        return cls(_UINT64_MASK)

    @classmethod
    def begin_of_time(cls) -> "Timestamp":
        return cls(1)


class ExperimentType(enum.IntEnum):
    UNDEFINED = 0
    PHYSICS_TRIGGER = 1
    CALIBRATION_TRIGGER = 2
    RANDOM_TRIGGER = 3
    RESERVED = 4
    TRACED_EVENT = 5
    TEST_TRIGGER = 6
    ERROR_TRIGGER = 15


INVALID_BUNCH_XING = -1
INVALID_STORE_NUMBER = 0


@dataclass
class EventAuxiliary:
    """Auxiliary data stored with each event."""

    event_id: EventID = field(default_factory=EventID)
    process_guid: str = ""
    time: Timestamp = field(default_factory=Timestamp)
    is_real_data: bool = False
    experiment_type: ExperimentType = ExperimentType.UNDEFINED
    bunch_crossing: int = INVALID_BUNCH_XING
    store_number: int = INVALID_STORE_NUMBER
    orbit_number: int = INVALID_BUNCH_XING
    old_luminosity_block: int = 0

    @property
    def luminosity_block(self) -> int:
        """The event's luminosity block, falling back on the obsolete field."""
        if self.event_id.luminosity_block != 0:
            return self.event_id.luminosity_block
        return self.old_luminosity_block

    @property
    def run(self) -> int:
        return self.event_id.run

    @property
    def event(self) -> int:
        return self.event_id.event

    def reset_obsolete_info(self) -> None:
        self.old_luminosity_block = 0