"""Composite event groups holding child channels and nested subgroups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
import threading
from types import MappingProxyType
from typing import Any, Union

from .channel import _MISSING, BaseEvent
from .exceptions import (
    DuplicateNameError,
    EventNotFoundError,
    GroupCycleError,
    GroupNotFoundError,
)

LOGGER = logging.getLogger(__name__)

Child = Union[BaseEvent, "EventGroup"]


class EventGroup:
    """Named node owning child events and child groups.

    Events and subgroups live in independent namespaces, so an event and a
    subgroup may share a name. Every child has exactly one owner: adding a
    child that already belongs to another group moves it here.
    ``activate()`` cascades through every child event and then every child
    group.
    """

    def __init__(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Group name must be a non-empty string.")
        self._name = name
        self.enabled = True
        self._events: dict[str, BaseEvent] = {}
        self._groups: dict[str, EventGroup] = {}
        self._owner: EventGroup | None = None
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def owner(self) -> EventGroup | None:
        """Group currently holding this group, if any."""
        return self._owner

    @property
    def is_enabled(self) -> bool:
        return self.enabled

    @property
    def events(self) -> Mapping[str, BaseEvent]:
        """Read-only view of child events keyed by name."""
        return MappingProxyType(self._events)

    @property
    def groups(self) -> Mapping[str, EventGroup]:
        """Read-only view of child groups keyed by name."""
        return MappingProxyType(self._groups)

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def add(self, item: Child | Iterable[Child]) -> None:
        """Attach one child or a sequence of children.

        Channels go into the event namespace, groups into the subgroup
        namespace. A batch stops at the first duplicate; children added
        before it stay attached. A child owned by another group is detached
        from it once it has been attached here.
        """
        if isinstance(item, (BaseEvent, EventGroup)):
            self._add_child(item)
            return
        if isinstance(item, (str, bytes)) or not isinstance(item, Iterable):
            raise TypeError(f"Cannot add {type(item).__name__} to an EventGroup.")
        for child in item:
            self._add_child(child)

    def _add_child(self, child: Any) -> None:
        if isinstance(child, EventGroup):
            self._add_group(child)
        elif isinstance(child, BaseEvent):
            self._add_event(child)
        else:
            raise TypeError(f"Cannot add {type(child).__name__} to an EventGroup.")

    def _add_event(self, event: BaseEvent) -> None:
        with self._lock:
            if event.name in self._events:
                raise DuplicateNameError(self._name, event.name, "event")
            previous = event._owner
            self._events[event.name] = event
            event._owner = self
        LOGGER.debug(
            "group.event.added",
            extra={
                "event": "group.event.added",
                "group": self._name,
                "event_name": event.name,
            },
        )
        if previous is not None and previous is not self:
            previous._detach_event(event)

    def _add_group(self, group: EventGroup) -> None:
        if group._subtree_contains(self):
            raise GroupCycleError(
                f"Adding group {group.name!r} to {self._name!r} would create a cycle"
            )
        with self._lock:
            if group.name in self._groups:
                raise DuplicateNameError(self._name, group.name, "subgroup")
            previous = group._owner
            self._groups[group.name] = group
            group._owner = self
        LOGGER.debug(
            "group.subgroup.added",
            extra={
                "event": "group.subgroup.added",
                "group": self._name,
                "subgroup": group.name,
            },
        )
        if previous is not None and previous is not self:
            previous._detach_group(group)

    def _detach_event(self, event: BaseEvent) -> bool:
        with self._lock:
            for key, child in self._events.items():
                if child is event:
                    del self._events[key]
                    return True
        return False

    def _detach_group(self, group: EventGroup) -> bool:
        with self._lock:
            for key, child in self._groups.items():
                if child is group:
                    del self._groups[key]
                    return True
        return False

    def _subtree_contains(self, target: EventGroup) -> bool:
        """Return True when ``target`` is this group or one of its descendants."""
        pending: list[EventGroup] = [self]
        while pending:
            current = pending.pop()
            if current is target:
                return True
            pending.extend(current._groups.values())
        return False

    def get_event(self, name: str, payload_type: type | None = None) -> BaseEvent | None:
        """Return the child event called ``name``.

        When ``payload_type`` is given and the stored channel is not declared
        over that type, ``None`` is returned instead of the channel.
        """
        try:
            event = self._events[name]
        except KeyError:
            raise EventNotFoundError(self._name, name) from None
        if payload_type is not None and not event.accepts(payload_type):
            return None
        return event

    def get_group(self, name: str) -> EventGroup:
        try:
            return self._groups[name]
        except KeyError:
            raise GroupNotFoundError(self._name, name) from None

    def has_event(self, name: str) -> bool:
        return name in self._events

    def has_group(self, name: str) -> bool:
        return name in self._groups

    def remove_event(self, event: BaseEvent) -> bool:
        """Detach ``event`` by identity; returns False when it is not a child."""
        with self._lock:
            removed = self._detach_event(event)
            if removed and event._owner is self:
                event._owner = None
        return removed

    def remove_event_by_name(self, name: str) -> bool:
        with self._lock:
            event = self._events.pop(name, None)
            if event is None:
                return False
            if event._owner is self:
                event._owner = None
        return True

    def remove_group(self, group: EventGroup) -> bool:
        """Detach ``group`` by identity; returns False when it is not a child."""
        with self._lock:
            removed = self._detach_group(group)
            if removed and group._owner is self:
                group._owner = None
        return removed

    def remove_group_by_name(self, name: str) -> bool:
        with self._lock:
            group = self._groups.pop(name, None)
            if group is None:
                return False
            if group._owner is self:
                group._owner = None
        return True

    def activate(self, payload: Any = _MISSING, payload_type: type | None = None) -> None:
        """Cascade activation through all child events, then all child groups.

        With a payload, each child event declared over ``payload_type``
        (default ``type(payload)``) receives it; every other child event is
        activated bare. Child groups are always activated bare. The group's
        own ``enabled`` flag is not consulted.
        """
        with self._lock:
            events = list(self._events.values())
            groups = list(self._groups.values())

        if payload is _MISSING:
            for event in events:
                event.activate()
        else:
            declared = payload_type if payload_type is not None else type(payload)
            for event in events:
                if event.accepts(declared):
                    event.activate(payload)
                else:
                    event.activate()

        for group in groups:
            group.activate()

    def __getitem__(self, name: str) -> BaseEvent:
        return self.get_event(name)

    def __setitem__(self, name: str, event: BaseEvent) -> None:
        # Replace-or-insert; uniqueness is only enforced by add().
        if not isinstance(event, BaseEvent):
            raise TypeError("Only event channels can be assigned by name.")
        with self._lock:
            if event._owner is self:
                self._detach_event(event)
            displaced = self._events.get(name)
            previous = event._owner
            self._events[name] = event
            event._owner = self
            if displaced is not None and displaced is not event:
                displaced._owner = None
        if previous is not None and previous is not self:
            previous._detach_event(event)

    def __contains__(self, name: object) -> bool:
        return name in self._events

    def __sub__(self, name: str) -> EventGroup:
        return self.get_group(name)

    def __repr__(self) -> str:
        state = "enabled" if self.enabled else "disabled"
        return (
            f"EventGroup({self._name!r}, {state}, events={len(self._events)}, "
            f"groups={len(self._groups)})"
        )
