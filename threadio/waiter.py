"""Delays work by a time proportional to a data product's size."""

from __future__ import annotations

import time
from typing import Sequence

from threadio.products import DataProductRetriever
from threadio.tasks import TaskHolder


class Waiter:
    """Sleeps ``scale`` microseconds per byte of one chosen data product."""

    def __init__(self, data_product_index: int, scale_factor: float) -> None:
        self._index = data_product_index
        self._scale = scale_factor

    def wait_async(self, retrievers: Sequence[DataProductRetriever], callback: TaskHolder) -> None:
        """Sleep on the callback's task group, then release the callback."""
        held = callback.copy()
        scale, index = self._scale, self._index

        def sleep() -> None:
            try:
                seconds = scale * retrievers[index].size * 1e-6
                if seconds > 0:
                    time.sleep(seconds)
            finally:
                held.done_waiting()

        callback.group.run(sleep)
        callback.done_waiting()