"""Domain exception hierarchy for the event tree."""

from __future__ import annotations


class EventTreeError(RuntimeError):
    """Base class for all event tree errors."""


class DuplicateNameError(EventTreeError):
    """Raised when a group already holds a child with the same name."""

    def __init__(self, group: str, name: str, kind: str = "event") -> None:
        super().__init__(f"EventGroup {group!r} already has the {kind} {name!r}")
        self.group = group
        self.name = name
        self.kind = kind


class EventNotFoundError(EventTreeError):
    """Raised when a group has no child event with the requested name."""

    def __init__(self, group: str, name: str) -> None:
        super().__init__(f"EventGroup {group!r} does not have the event {name!r}")
        self.group = group
        self.name = name


class GroupNotFoundError(EventTreeError):
    """Raised when a group or path segment does not resolve to a subgroup."""

    def __init__(self, group: str, name: str, path: str | None = None) -> None:
        if path is None:
            message = f"EventGroup {group!r} does not have the subgroup {name!r}"
        else:
            message = f"Group segment {name!r} of path {path!r} can not be found"
        super().__init__(message)
        self.group = group
        self.name = name
        self.path = path


class PathFormatError(EventTreeError):
    """Raised when a registry path is malformed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Malformed event path {path!r}: {reason}")
        self.path = path
        self.reason = reason


class GroupCycleError(EventTreeError):
    """Raised when adding a subgroup would make the tree cyclic."""


class ConfigValidationError(EventTreeError):
    """Raised when configuration cannot be validated safely."""
