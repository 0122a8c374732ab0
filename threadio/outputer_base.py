"""The interface every outputer implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from threadio.identifiers import EventIdentifier
from threadio.products import DataProductRetriever
from threadio.tasks import TaskHolder


class OutputerBase(ABC):
    """Receives the data products of each processed event."""

    @abstractmethod
    def setup_for_lane(self, lane_index: int, retrievers: Sequence[DataProductRetriever]) -> None:
        """Learn the retrievers that ``lane_index`` will use for every event."""

    @abstractmethod
    def product_ready_async(
        self, lane_index: int, retriever: DataProductRetriever, callback: TaskHolder
    ) -> None:
        """Handle one product as soon as it is available; release ``callback`` when done."""

    @abstractmethod
    def uses_product_ready_async(self) -> bool:
        """Whether product_ready_async should be called for each product."""

    @abstractmethod
    def output_async(self, lane_index: int, event_id: EventIdentifier, callback: TaskHolder) -> None:
        """Handle a finished event; release ``callback`` when done."""

    @abstractmethod
    def print_summary(self) -> None:
        """Write a report on the outputer's work to standard output."""