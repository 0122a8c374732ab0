"""Named registries of component makers."""

from __future__ import annotations

import threading
from typing import Any, Callable, Hashable, Optional


class ComponentFactory:
    """Maps component names to callables that build them."""

    def __init__(self) -> None:
        self._makers: dict[str, Callable[..., Any]] = {}

    def register(self, name: str, maker: Callable[..., Any]) -> Callable[..., Any]:
        """Register ``maker`` under ``name``, replacing any earlier one."""
        self._makers[name] = maker
        return maker

    def create(self, name: str, *args: Any) -> Optional[Any]:
        """Build the component called ``name``; None if no such name is known."""
        maker = self._makers.get(name)
        if maker is None:
            return None
        return maker(*args)

    def __contains__(self, name: object) -> bool:
        return name in self._makers


_factories: dict[Hashable, ComponentFactory] = {}
_factories_lock = threading.Lock()


def get_factory(key: Hashable) -> ComponentFactory:
    """Return the single factory kept for ``key``, creating it on first use."""
    with _factories_lock:
        factory = _factories.get(key)
        if factory is None:
            factory = ComponentFactory()
            _factories[key] = factory
        return factory