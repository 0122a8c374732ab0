"""Event sources: per-lane sources and sources shared between lanes."""

from __future__ import annotations

import sys
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

from threadio.identifiers import EventIdentifier
from threadio.products import DataProductRetriever
from threadio.tasks import OptionalTaskHolder


class SourceBase(ABC):
    """A source used by a single lane; it keeps track of its reading time."""

    def __init__(self) -> None:
        self._accumulated_us = 0

    @abstractmethod
    def number_of_data_products(self) -> int:
        """Number of data products each event provides."""

    @abstractmethod
    def data_products(self) -> list[DataProductRetriever]:
        """The retrievers for the current event's data products."""

    @abstractmethod
    def event_identifier(self) -> EventIdentifier:
        """The identifier of the current event."""

    @abstractmethod
    def _read_event(self, event_index: int) -> bool:
        """Move to ``event_index``; return False if there is no such event."""

    def goto_event(self, event_index: int) -> bool:
        """Read the event at ``event_index``, adding the time taken to the total."""
        start = time.perf_counter_ns()
        more = self._read_event(event_index)
        self._accumulated_us += (time.perf_counter_ns() - start) // 1000
        return more

    def accumulated_time(self) -> int:
        """Total time spent reading events, in microseconds."""
        return self._accumulated_us


class SharedSourceBase(ABC):
    """A source that serves events to several lanes at once."""

    def __init__(self, max_n_events: int) -> None:
        self._max_n_events = max_n_events

    @property
    def max_n_events(self) -> int:
        return self._max_n_events

    @abstractmethod
    def number_of_data_products(self) -> int:
        """Number of data products each event provides."""

    @abstractmethod
    def data_products(self, lane: int, event_index: int) -> list[DataProductRetriever]:
        """The retrievers used by ``lane`` for the event at ``event_index``."""

    @abstractmethod
    def event_identifier(self, lane: int, event_index: int) -> EventIdentifier:
        """The identifier of the event ``lane`` is processing."""

    @abstractmethod
    def print_summary(self) -> None:
        """Write a short report on the source's work to standard output."""

    @abstractmethod
    def _read_event_async(self, lane: int, event_index: int, task: OptionalTaskHolder) -> None:
        """Read the event; run or release ``task`` only if it could be read."""

    def may_be_able_to_go_to_event(self, event_index: int) -> bool:
        return event_index < self._max_n_events

    def goto_event_async(self, lane: int, event_index: int, task: OptionalTaskHolder) -> None:
        """Read the event at ``event_index`` for ``lane``, then go on with ``task``."""
        self._read_event_async(lane, event_index, task)


class ReplicatedSharedSource(SharedSourceBase):
    """A shared source made of one independent per-lane source for each lane."""

    def __init__(
        self,
        source_type: Callable[..., Any],
        n_lanes: int,
        n_events: int,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        super().__init__(n_events)
        self._sources = [source_type(*args, **kwargs) for _ in range(n_lanes)]

    @property
    def sources(self) -> list[Any]:
        return list(self._sources)

    def number_of_data_products(self) -> int:
        return self._sources[0].number_of_data_products()

    def data_products(self, lane: int, event_index: int) -> list[DataProductRetriever]:
        return self._sources[lane].data_products()

    def event_identifier(self, lane: int, event_index: int) -> EventIdentifier:
        return self._sources[lane].event_identifier()

    def print_summary(self) -> None:
        print(f"\nSource time: {self.accumulated_time()}us\n")
        sys.stdout.flush()

    def accumulated_time(self) -> int:
        """Reading time summed over all lanes, in microseconds."""
        return sum(source.accumulated_time() for source in self._sources)

    def _read_event_async(self, lane: int, event_index: int, task: OptionalTaskHolder) -> None:
        if self._sources[lane].goto_event(event_index):
            task.run_now()