"""Hierarchical, path-addressed event groups and channels.

Named event channels are organized into nested groups, and a registry
resolves ``"group/group/.../group:event"`` paths against a single root.
"""

from .channel import BaseEvent, Event, TypedEvent
from .exceptions import (
    ConfigValidationError,
    DuplicateNameError,
    EventNotFoundError,
    EventTreeError,
    GroupCycleError,
    GroupNotFoundError,
    PathFormatError,
)
from .group import EventGroup
from .registry import EventRegistry, get_registry, init_registry, reset_registry, root

__all__ = [
    "BaseEvent",
    "ConfigValidationError",
    "DuplicateNameError",
    "Event",
    "EventGroup",
    "EventNotFoundError",
    "EventRegistry",
    "EventTreeError",
    "GroupCycleError",
    "GroupNotFoundError",
    "PathFormatError",
    "TypedEvent",
    "get_registry",
    "init_registry",
    "reset_registry",
    "root",
]
