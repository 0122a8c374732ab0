"""Handles through which data products are located and fetched."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from threadio.tasks import TaskHolder


class DelayedProductRetriever(ABC):
    """Fetches a data product's contents on request."""

    @abstractmethod
    def get_async(self, retriever: "DataProductRetriever", index: int, callback: TaskHolder) -> None:
        """Fill in the product for ``retriever`` and then release ``callback``."""


@dataclass(eq=False)
class DataProductRetriever:
    """One named data product: where it lives, its type and its stored size."""

    index: int
    address: Any
    name: str
    class_type: Any
    delayed: DelayedProductRetriever
    size: int = 0

    def get_async(self, callback: TaskHolder) -> None:
        self.delayed.get_async(self, self.index, callback)