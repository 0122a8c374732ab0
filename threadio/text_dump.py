"""An outputer that writes product sizes and finished events as text."""

from __future__ import annotations

import math
import sys
import threading
from collections import deque
from typing import Callable, Sequence

from threadio.identifiers import EventIdentifier
from threadio.outputer_base import OutputerBase
from threadio.products import DataProductRetriever
from threadio.tasks import TaskGroup, TaskHolder


class _SerialTaskQueue:
    """Runs pushed callables on their task groups one at a time, in order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: deque[tuple[TaskGroup, Callable[[], None]]] = deque()
        self._running = False

    def push(self, group: TaskGroup, func: Callable[[], None]) -> None:
        with self._lock:
            self._pending.append((group, func))
            if self._running:
                return
            self._running = True
        self._spawn_next()

    def _spawn_next(self) -> None:
        with self._lock:
            if not self._pending:
                self._running = False
                return
            group, func = self._pending.popleft()
        group.run(lambda: self._run(func))

    def _run(self, func: Callable[[], None]) -> None:
        try:
            func()
        finally:
            self._spawn_next()


class TextDumpOutputer(OutputerBase):
    """Prints each product and event, and/or the average size of each product."""

    def __init__(self, per_event_dump: bool, summary_dump: bool) -> None:
        self._per_event_dump = per_event_dump
        self._summary_dump = summary_dump
        self._queue = _SerialTaskQueue()
        self._lock = threading.Lock()
        self._product_names: list[str] = []
        self._product_sizes: list[int] = []
        self._event_count = 0

    def setup_for_lane(self, lane_index: int, retrievers: Sequence[DataProductRetriever]) -> None:
        if lane_index == 0 and self._summary_dump:
            self._product_sizes = [0] * len(retrievers)
            self._product_names = [product.name for product in retrievers]

    def product_ready_async(
        self, lane_index: int, retriever: DataProductRetriever, callback: TaskHolder
    ) -> None:
        if self._summary_dump:
            with self._lock:
                self._product_sizes[retriever.index] += retriever.size
        if self._per_event_dump:
            def dump() -> None:
                print(f"lane: {lane_index} product: {retriever.name} size:{retriever.size}")
                callback.done_waiting()

            self._queue.push(callback.group, dump)
        else:
            callback.done_waiting()

    def uses_product_ready_async(self) -> bool:
        return True

    def output_async(self, lane_index: int, event_id: EventIdentifier, callback: TaskHolder) -> None:
        if self._per_event_dump:
            def dump() -> None:
                print(
                    f"lane: {lane_index} finished event:"
                    f"{event_id.run} {event_id.lumi} {event_id.event}"
                )
                callback.done_waiting()

            self._queue.push(callback.group, dump)
        if self._summary_dump:
            with self._lock:
                self._event_count += 1
        if not self._per_event_dump:
            callback.done_waiting()

    def print_summary(self) -> None:
        if not self._summary_dump:
            return
        with self._lock:
            n_events = self._event_count
            entries = list(zip(self._product_names, self._product_sizes))
        for name, size in entries:
            if n_events:
                average = size / n_events
            else:
                average = math.nan if size == 0 else math.inf
            print(f"product: {name} ave size: {average:g}")
        sys.stdout.flush()