"""A sequence whose elements are all of one concrete type."""

from __future__ import annotations

from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


class ProxyVector(Generic[T]):
    """Holds elements that are all instances of one ``element_type``.

    Elements are built in place by ``emplace_back`` from constructor
    arguments, so every element has exactly the declared type.
    """

    def __init__(self, element_type: type[T]) -> None:
        if not isinstance(element_type, type):
            raise TypeError("element_type must be a class")
        self._element_type = element_type
        self._items: list[T] = []
        self._capacity = 0

    @property
    def element_type(self) -> type[T]:
        return self._element_type

    @property
    def capacity(self) -> int:
        return max(self._capacity, len(self._items))

    def reserve(self, size: int) -> None:
        """Note that room for ``size`` elements is wanted."""
        if size < 0:
            raise ValueError("size must not be negative")
        self._capacity = max(self._capacity, size)

    def emplace_back(self, *args: Any) -> T:
        """Build a new element from ``args``, append it and return it."""
        item = self._element_type(*args)
        self._items.append(item)
        return item

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)