"""Named, enable-gated event channels.

Usage:
    clicked = Event("Click")

    @clicked.subscribe
    def on_click():
        print("clicked")

    clicked.activate()

    scored = TypedEvent("Score", int)
    scored += lambda points: print(points)
    scored.activate(10)
    scored.activate()  # listeners receive int() == 0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from .group import EventGroup

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


class BaseEvent(ABC):
    """Shared state and listener bookkeeping for every channel kind."""

    def __init__(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Event name must be a non-empty string.")
        self._name = name
        self.enabled = True
        self._listeners: list[Callable[..., Any]] = []
        self._owner: EventGroup | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def owner(self) -> EventGroup | None:
        """Group currently holding this channel, if any."""
        return self._owner

    @property
    def is_enabled(self) -> bool:
        return self.enabled

    @property
    def payload_type(self) -> type | None:
        """Declared element type, ``None`` for untyped channels."""
        return None

    @property
    def listeners(self) -> tuple[Callable[..., Any], ...]:
        """Return a snapshot of registered listeners in registration order."""
        return tuple(self._listeners)

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def subscribe(self, listener: Callable[..., Any]) -> Callable[..., Any]:
        """Attach a listener and return it, so this works as a decorator."""
        if not callable(listener):
            raise TypeError("Listener must be callable.")
        self._listeners.append(listener)
        LOGGER.debug(
            "event.listener.subscribed",
            extra={"event": "event.listener.subscribed", "event_name": self._name},
        )
        return listener

    def unsubscribe(self, listener: Callable[..., Any]) -> bool:
        """Detach the first registration of ``listener``.

        Returns False when the listener was never attached.
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        LOGGER.debug(
            "event.listener.unsubscribed",
            extra={"event": "event.listener.unsubscribed", "event_name": self._name},
        )
        return True

    def clear(self) -> None:
        self._listeners.clear()

    def accepts(self, payload_type: type) -> bool:
        """Return True when a typed cascade may hand this channel a payload."""
        declared = self.payload_type
        return declared is not None and declared is payload_type

    @abstractmethod
    def activate(self) -> None:
        """Dispatch to listeners unless disabled."""

    def _dispatch(self, *args: Any) -> None:
        if not self.enabled:
            LOGGER.debug(
                "event.activate.skipped",
                extra={"event": "event.activate.skipped", "event_name": self._name},
            )
            return
        for listener in list(self._listeners):
            listener(*args)

    def __iadd__(self, listener: Callable[..., Any]):
        self.subscribe(listener)
        return self

    def __isub__(self, listener: Callable[..., Any]):
        self.unsubscribe(listener)
        return self

    def __len__(self) -> int:
        return len(self._listeners)

    def __bool__(self) -> bool:
        # A channel without listeners is still a valid child.
        return True

    def __repr__(self) -> str:
        state = "enabled" if self.enabled else "disabled"
        return f"{type(self).__name__}({self._name!r}, {state}, listeners={len(self)})"


class Event(BaseEvent):
    """Untyped channel; listeners take no arguments."""

    def activate(self) -> None:
        """Invoke every listener in registration order unless disabled."""
        self._dispatch()


class TypedEvent(BaseEvent, Generic[T]):
    """Channel carrying one payload of the declared ``payload_type``."""

    def __init__(self, name: str, payload_type: type[T], default: Any = _MISSING) -> None:
        super().__init__(name)
        if not isinstance(payload_type, type):
            raise TypeError("payload_type must be a type.")
        self._payload_type = payload_type
        self._default = default

    @property
    def payload_type(self) -> type[T]:
        return self._payload_type

    def default_payload(self) -> T | None:
        """Return the payload used when ``activate()`` is called bare.

        An explicit ``default`` wins; otherwise the type's zero value is
        built with ``payload_type()``, falling back to ``None`` for types
        that need constructor arguments.
        """
        if self._default is not _MISSING:
            return self._default
        try:
            return self._payload_type()
        except TypeError:
            return None

    def activate(self, payload: Any = _MISSING) -> None:
        """Invoke every listener with ``payload`` unless disabled."""
        if payload is _MISSING and self.enabled:
            payload = self.default_payload()
        self._dispatch(payload)

    def __repr__(self) -> str:
        state = "enabled" if self.enabled else "disabled"
        return (
            f"TypedEvent({self.name!r}, {self._payload_type.__name__}, {state}, "
            f"listeners={len(self)})"
        )
