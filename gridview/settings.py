"""A process-wide container for the typed setting groups of each subsystem.

Setting groups are stored by their type: storing a value replaces any earlier
value of the same type, and reading returns a copy so callers cannot change
the stored state by accident. Per-property update and reader callbacks keep
the settings in step with the editor.
"""

from __future__ import annotations

import copy
import threading
from typing import Any, Callable, TypeVar

T = TypeVar("T")

UpdateHandler = Callable[[Any], None]
Reader = Callable[[], Any]


class Settings:
    """Typed setting groups plus named update and reader callbacks."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._values: dict[type, Any] = {}
        self._listeners: dict[str, UpdateHandler] = {}
        self._readers: dict[str, Reader] = {}

    def set_setting_handlers(
        self, property_name: str, update_func: UpdateHandler, reader_func: Reader
    ) -> None:
        """Register the callbacks that apply and report one named setting."""
        with self._lock:
            self._listeners[property_name] = update_func
            self._readers[property_name] = reader_func

    def set(self, value: Any) -> None:
        """Store a copy of ``value``, replacing any earlier value of its type."""
        stored = copy.deepcopy(value)
        with self._lock:
            self._values[type(value)] = stored

    def get(self, setting_type: type[T]) -> T:
        """Return a copy of the stored value of ``setting_type``.

        Raises KeyError if no value of that type has been stored.
        """
        with self._lock:
            try:
                value = self._values[setting_type]
            except KeyError:
                raise KeyError(
                    f"Trying to retrieve a settings object that doesn't exist: "
                    f"{setting_type.__name__}"
                ) from None
        return copy.deepcopy(value)

    def listener(self, property_name: str) -> UpdateHandler:
        """The update callback registered for ``property_name``."""
        with self._lock:
            try:
                return self._listeners[property_name]
            except KeyError:
                raise KeyError(f"No setting named {property_name!r}") from None

    def reader(self, property_name: str) -> Reader:
        """The reader callback registered for ``property_name``."""
        with self._lock:
            try:
                return self._readers[property_name]
            except KeyError:
                raise KeyError(f"No setting named {property_name!r}") from None

    def handle_changed_notification(self, arguments: list[Any]) -> None:
        """Apply a ``setting_changed`` notification of the form ``[name, value]``."""
        items = iter(arguments)
        try:
            name = next(items)
            value = next(items)
        except StopIteration:
            raise ValueError(
                "Setting change notification needs a name and a value"
            ) from None
        if not isinstance(name, str):
            raise TypeError(f"Setting name must be a string, not {name!r}")
        self.listener(name)(value)


SETTINGS = Settings()