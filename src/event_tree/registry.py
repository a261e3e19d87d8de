"""Path-addressed access to a tree of event groups.

A registry owns a single root group. Paths are resolved relative to it:
every segment but the last names a nested subgroup, and the last segment
names a ``group:event`` pair. ``"UI/Buttons:Click"`` therefore resolves
group ``UI`` under the root, then event ``Click`` inside its subgroup
``Buttons``.

Usage:
    registry = get_registry()
    ui = EventGroup("UI")
    buttons = EventGroup("Buttons")
    buttons.add(Event("Click"))
    ui.add(buttons)
    registry.root.add(ui)

    registry["UI/Buttons:Click"].activate()
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import threading
from typing import Any

from .channel import BaseEvent
from .exceptions import EventTreeError, GroupNotFoundError, PathFormatError
from .group import EventGroup

LOGGER = logging.getLogger(__name__)

ROOT_NAME = "Root"
DEFAULT_PATH_SEPARATOR = "/"
DEFAULT_EVENT_SEPARATOR = ":"


class EventRegistry:
    """Root group named ``"Root"`` plus the path resolver for its subtree."""

    def __init__(
        self,
        path_separator: str = DEFAULT_PATH_SEPARATOR,
        event_separator: str = DEFAULT_EVENT_SEPARATOR,
    ) -> None:
        for label, value in (
            ("path_separator", path_separator),
            ("event_separator", event_separator),
        ):
            if not isinstance(value, str) or len(value) != 1:
                raise ValueError(f"{label} must be a single character.")
        if path_separator == event_separator:
            raise ValueError("path_separator and event_separator must differ.")
        self._root = EventGroup(ROOT_NAME)
        self.path_separator = path_separator
        self.event_separator = event_separator

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> EventRegistry:
        """Build a registry from the ``registry`` section of a loaded config."""
        section = config.get("registry", {})
        return cls(
            path_separator=section.get("path_separator", DEFAULT_PATH_SEPARATOR),
            event_separator=section.get("event_separator", DEFAULT_EVENT_SEPARATOR),
        )

    @property
    def root(self) -> EventGroup:
        return self._root

    def split_path(self, path: str) -> tuple[list[str], str, str]:
        """Split ``path`` into (group segments, final group name, event name)."""
        if not isinstance(path, str) or not path:
            raise PathFormatError(str(path), "path is empty")
        segments = path.split(self.path_separator)
        if not all(segments):
            raise PathFormatError(path, "path contains an empty segment")
        *group_segments, last = segments
        # Group names may contain the event separator; event names may not.
        parts = last.rsplit(self.event_separator, 1)
        if len(parts) != 2 or not all(parts):
            raise PathFormatError(
                path,
                f"final segment {last!r} must have the form "
                f"'group{self.event_separator}event'",
            )
        return group_segments, parts[0], parts[1]

    def resolve_group(self, path: str) -> EventGroup:
        """Return the group addressed by a plain group path such as ``"A/B"``.

        The empty path addresses the root group.
        """
        if not path:
            return self._root
        segments = path.split(self.path_separator)
        if not all(segments):
            raise PathFormatError(path, "group paths hold only non-empty group names")
        return self._walk(segments, path)

    def _walk(self, segments: list[str], path: str) -> EventGroup:
        current = self._root
        for segment in segments:
            try:
                current = current.get_group(segment)
            except GroupNotFoundError as exc:
                LOGGER.debug(
                    "registry.path.unresolved",
                    extra={
                        "event": "registry.path.unresolved",
                        "path": path,
                        "segment": segment,
                    },
                )
                raise GroupNotFoundError(current.name, segment, path=path) from exc
        return current

    def _owner_of(self, path: str) -> tuple[EventGroup, str]:
        group_segments, group_name, event_name = self.split_path(path)
        return self._walk([*group_segments, group_name], path), event_name

    def get_event(self, path: str, payload_type: type | None = None) -> BaseEvent | None:
        """Resolve ``path`` to a channel; see ``EventGroup.get_event``."""
        group, event_name = self._owner_of(path)
        return group.get_event(event_name, payload_type)

    def __getitem__(self, path: str) -> BaseEvent:
        group, event_name = self._owner_of(path)
        return group[event_name]

    def __setitem__(self, path: str, event: BaseEvent) -> None:
        group, event_name = self._owner_of(path)
        group[event_name] = event

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            group, event_name = self._owner_of(path)
        except (GroupNotFoundError, PathFormatError):
            return False
        return event_name in group

    def __repr__(self) -> str:
        return f"EventRegistry(root={self._root!r})"


_default_registry: EventRegistry | None = None
_default_lock = threading.Lock()


def init_registry(config: Mapping[str, Any] | None = None) -> EventRegistry:
    """Create the process-wide registry, optionally from a loaded config.

    Raises ``EventTreeError`` when the registry already exists; call
    ``reset_registry()`` first to replace it.
    """
    global _default_registry
    with _default_lock:
        if _default_registry is not None:
            raise EventTreeError("The default event registry is already initialized")
        _default_registry = (
            EventRegistry() if config is None else EventRegistry.from_config(config)
        )
        LOGGER.debug(
            "registry.initialized",
            extra={"event": "registry.initialized", "root": _default_registry.root.name},
        )
        return _default_registry


def get_registry() -> EventRegistry:
    """Return the process-wide registry, creating it with defaults if needed."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = EventRegistry()
        return _default_registry


def reset_registry() -> None:
    """Drop the process-wide registry and its whole tree."""
    global _default_registry
    with _default_lock:
        _default_registry = None


def root() -> EventGroup:
    return get_registry().root
