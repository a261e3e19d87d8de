"""Tests for path resolution and the process-wide registry."""

from __future__ import annotations

import unittest

import event_tree.registry as registry_module
from event_tree.channel import Event, TypedEvent
from event_tree.exceptions import (
    EventNotFoundError,
    EventTreeError,
    GroupNotFoundError,
    PathFormatError,
)
from event_tree.group import EventGroup
from event_tree.registry import (
    EventRegistry,
    get_registry,
    init_registry,
    reset_registry,
    root,
)


def _build_ui_tree(registry: EventRegistry) -> Event:
    click = Event("Click")
    buttons = EventGroup("Buttons")
    buttons.add(click)
    ui = EventGroup("UI")
    ui.add(buttons)
    registry.root.add(ui)
    return click


class PathResolutionTests(unittest.TestCase):
    """Validate group/event path addressing."""

    def setUp(self) -> None:
        self.registry = EventRegistry()
        self.click = _build_ui_tree(self.registry)

    def test_root_is_named_root(self) -> None:
        self.assertEqual(self.registry.root.name, "Root")

    def test_group_event_suffix_resolves_channel(self) -> None:
        self.assertIs(self.registry["UI/Buttons:Click"], self.click)

    def test_single_segment_addresses_subgroup_of_root(self) -> None:
        save = Event("Save")
        self.registry.root.get_group("UI").add(save)
        self.assertIs(self.registry["UI:Save"], save)

    def test_nested_path_resolves_deep_event(self) -> None:
        leaf = Event("D")
        c = EventGroup("C")
        c.add(leaf)
        b = EventGroup("B")
        b.add(c)
        a = EventGroup("A")
        a.add(b)
        self.registry.root.add(a)

        self.assertIs(self.registry["A/B/C:D"], leaf)

    def test_missing_event_raises_event_not_found(self) -> None:
        with self.assertRaises(EventNotFoundError):
            self.registry["UI/Buttons:Missing"]

    def test_missing_group_raises_group_not_found_with_segment(self) -> None:
        with self.assertRaises(GroupNotFoundError) as ctx:
            self.registry["Missing/Buttons:Click"]

        self.assertEqual(ctx.exception.name, "Missing")
        self.assertEqual(ctx.exception.path, "Missing/Buttons:Click")
        self.assertIsInstance(ctx.exception.__cause__, GroupNotFoundError)

    def test_missing_final_group_raises_group_not_found(self) -> None:
        with self.assertRaises(GroupNotFoundError) as ctx:
            self.registry["UI/Links:Click"]
        self.assertEqual(ctx.exception.name, "Links")

    def test_intermediate_segment_equal_to_last_is_navigated(self) -> None:
        inner = EventGroup("X")
        event = Event("E")
        inner.add(event)
        outer = EventGroup("X")
        outer.add(inner)
        self.registry.root.add(outer)

        self.assertIs(self.registry["X/X:E"], event)

    def test_malformed_paths_raise_path_format_error(self) -> None:
        malformed = (
            "",
            "UI/Buttons",
            "UI//Buttons:Click",
            "UI/Buttons:",
            ":Click",
        )
        for path in malformed:
            with self.subTest(path=path):
                with self.assertRaises(PathFormatError):
                    self.registry[path]

    def test_write_inserts_into_final_group(self) -> None:
        hover = Event("Hover")

        self.registry["UI/Buttons:Hover"] = hover

        buttons = self.registry.resolve_group("UI/Buttons")
        self.assertIs(buttons.get_event("Hover"), hover)

    def test_write_replaces_existing_channel(self) -> None:
        replacement = Event("Click")

        self.registry["UI/Buttons:Click"] = replacement

        self.assertIs(self.registry["UI/Buttons:Click"], replacement)

    def test_write_to_missing_group_raises(self) -> None:
        with self.assertRaises(GroupNotFoundError):
            self.registry["UI/Missing:Click"] = Event("Click")

    def test_get_event_with_payload_type(self) -> None:
        scored = TypedEvent("Score", int)
        self.registry["UI/Buttons:Score"] = scored

        self.assertIs(self.registry.get_event("UI/Buttons:Score", int), scored)
        self.assertIsNone(self.registry.get_event("UI/Buttons:Score", str))

    def test_contains_reports_resolvable_paths(self) -> None:
        self.assertIn("UI/Buttons:Click", self.registry)
        self.assertNotIn("UI/Buttons:Missing", self.registry)
        self.assertNotIn("Missing/Buttons:Click", self.registry)

    def test_contains_is_false_for_malformed_paths(self) -> None:
        for path in ("UI/Buttons", "", "UI//Buttons:Click", "UI/Buttons:"):
            with self.subTest(path=path):
                self.assertNotIn(path, self.registry)
        self.assertNotIn(42, self.registry)

    def test_group_names_containing_event_separator_are_reachable(self) -> None:
        ratio = EventGroup("16:9")
        inner = EventGroup("a:b")
        resized = Event("Resized")
        inner.add(resized)
        ratio.add(inner)
        self.registry.root.add(ratio)

        self.assertIs(self.registry["16:9/a:b:Resized"], resized)
        self.assertIs(self.registry.resolve_group("16:9/a:b"), inner)
        with self.assertRaises(GroupNotFoundError):
            self.registry["UI/Buttons:Click:Extra"]

    def test_resolve_group_paths(self) -> None:
        self.assertIs(self.registry.resolve_group(""), self.registry.root)
        self.assertEqual(self.registry.resolve_group("UI/Buttons").name, "Buttons")
        with self.assertRaises(GroupNotFoundError):
            self.registry.resolve_group("UI/Nope")
        with self.assertRaises(GroupNotFoundError):
            self.registry.resolve_group("UI/Buttons:Click")
        with self.assertRaises(PathFormatError):
            self.registry.resolve_group("UI//Buttons")

    def test_activation_through_path(self) -> None:
        calls: list[str] = []
        self.click.subscribe(lambda: calls.append("click"))

        self.registry["UI/Buttons:Click"].activate()

        self.assertEqual(calls, ["click"])

    def test_custom_separators(self) -> None:
        registry = EventRegistry(path_separator=".", event_separator="#")
        event = Event("E")
        group = EventGroup("G")
        group.add(event)
        outer = EventGroup("O")
        outer.add(group)
        registry.root.add(outer)

        self.assertEqual(registry.root.name, "Root")
        self.assertIs(registry["O.G#E"], event)

    def test_invalid_separators_rejected(self) -> None:
        with self.assertRaises(ValueError):
            EventRegistry(path_separator="//")
        with self.assertRaises(ValueError):
            EventRegistry(path_separator=":", event_separator=":")

    def test_from_config_uses_registry_section(self) -> None:
        registry = EventRegistry.from_config(
            {"registry": {"path_separator": ".", "event_separator": "#"}}
        )
        self.assertEqual(registry.root.name, "Root")
        self.assertEqual(registry.path_separator, ".")
        self.assertEqual(registry.event_separator, "#")


class DefaultRegistryTests(unittest.TestCase):
    """Validate the lifecycle of the process-wide registry."""

    def setUp(self) -> None:
        reset_registry()

    def tearDown(self) -> None:
        reset_registry()

    def test_get_registry_returns_same_instance(self) -> None:
        first = get_registry()
        self.assertIs(get_registry(), first)
        self.assertIs(root(), first.root)
        self.assertEqual(root().name, "Root")

    def test_reset_registry_discards_tree(self) -> None:
        root().add(EventGroup("UI"))
        reset_registry()
        self.assertIsNone(registry_module._default_registry)
        self.assertFalse(root().has_group("UI"))

    def test_init_registry_from_config(self) -> None:
        registry = init_registry({"registry": {"path_separator": "."}})
        self.assertIs(get_registry(), registry)
        self.assertEqual(registry.path_separator, ".")
        self.assertEqual(root().name, "Root")

    def test_init_registry_twice_raises(self) -> None:
        init_registry()
        with self.assertRaises(EventTreeError):
            init_registry()


if __name__ == "__main__":
    unittest.main()
