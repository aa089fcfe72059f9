# Standard library imports
import threading
from typing import Any, Callable, Dict


class BaseContainer:
    """
    Minimal service registry.

    Singletons are stored instances; factories are called on every `get`.
    Keys are usually classes (domain interfaces, use cases) but strings work
    for plain resources such as collections.
    """

    def __init__(self) -> None:
        self._singletons: Dict[Any, Any] = {}
        self._factories: Dict[Any, Callable[[], Any]] = {}
        self._lock = threading.RLock()

    def register_singleton(self, key: Any, instance: Any) -> None:
        with self._lock:
            self._factories.pop(key, None)
            self._singletons[key] = instance

    def register_factory(self, key: Any, factory: Callable[[], Any]) -> None:
        with self._lock:
            self._singletons.pop(key, None)
            self._factories[key] = factory

    def get(self, key: Any) -> Any:
        """
        Resolve a registration

        Raises:
            ValueError: If nothing is registered under `key`
        """
        with self._lock:
            if key in self._singletons:
                return self._singletons[key]
            factory = self._factories.get(key)
        if factory is None:
            name = getattr(key, "__name__", key)
            raise ValueError(f"No registration found for {name}")
        return factory()
