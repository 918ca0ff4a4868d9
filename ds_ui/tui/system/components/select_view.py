"""Formatted-text rendering for a mounted SelectController."""

from __future__ import annotations

from typing import Callable, TypeAlias, Union

from prompt_toolkit.mouse_events import MouseEvent, MouseEventType

from ds_ui.config import SelectSettings
from ds_ui.tui.core.controller import SelectController
from ds_ui.tui.core.host import Element, Host
from ds_ui.tui.core.theme import class_names

MouseHandler: TypeAlias = Callable[[MouseEvent], object]
Fragment: TypeAlias = Union[tuple[str, str], tuple[str, str, MouseHandler]]


class SelectView:
    """Turns controller state into prompt_toolkit fragments.

    Mouse handlers attached to fragments route clicks and hovers back to the
    host, so the controller sees the same events as in headless runs.
    """

    def __init__(
        self,
        controller: SelectController,
        host: Host,
        settings: SelectSettings | None = None,
    ) -> None:
        self._controller = controller
        self._host = host
        self._settings = settings or SelectSettings()
        self._scroll_top = 0

    @property
    def settings(self) -> SelectSettings:
        return self._settings

    def fragments(self) -> list[Fragment]:
        frags = self.header_fragments()
        frags.append(("", "\n"))
        if self._controller.is_open:
            frags.extend(self.option_fragments())
        return frags

    def header_fragments(self) -> list[Fragment]:
        controller = self._controller
        container = controller.container_ref.current
        focused = container is not None and self._host.focused is container
        base = class_names("container", container__focused=focused)
        toggle = self._click(container) if container is not None else None
        frags: list[Fragment] = []

        def add(name: str, text: str, handler: MouseHandler | None) -> None:
            style = f"{base} {class_names(name)}"
            if handler is None:
                frags.append((style, text))
            else:
                frags.append((style, text, handler))

        if controller.multiple:
            for badge in controller.badges:
                remove = self._click(badge)
                add("option-badge", f" {badge.data.label} ", remove)
                add("remove-btn", f"{self._settings.remove_glyph} ", remove)
        else:
            label = controller.selection.label()
            if label is not None:
                add("value", f" {label} ", toggle)
        if not frags:
            add("placeholder", f" {self._settings.placeholder or ' '} ", toggle)

        add("clear-btn", f" {self._settings.clear_glyph} ", self._click(controller.clear_button))
        add("divider", "│", toggle)
        add("caret", f" {self._settings.caret_glyph} ", toggle)
        return frags

    def option_fragments(self) -> list[Fragment]:
        controller = self._controller
        frags: list[Fragment] = []
        for index in self.visible_indices():
            row = controller.rows[index]
            option = row.data
            selected = controller.is_option_selected(option)
            highlighted = controller.is_highlighted(index)
            marker = "▸" if highlighted else " "
            if controller.multiple:
                check = "[x] " if selected else "[ ] "
            else:
                check = "• " if selected else "  "
            style = class_names(
                "option",
                option__selected=selected,
                option__highlighted=highlighted,
            )
            frags.append((style, f" {marker} {check}{option.label}\n", self._row_handler(row)))
        return frags

    def visible_indices(self) -> range:
        """Window of option rows to draw, following the highlighted row."""
        total = len(self._controller.rows)
        limit = self._settings.max_visible_options
        if total <= limit:
            self._scroll_top = 0
            return range(total)
        highlighted = self._controller.highlighted_index
        if 0 <= highlighted < total:
            if highlighted < self._scroll_top:
                self._scroll_top = highlighted
            elif highlighted >= self._scroll_top + limit:
                self._scroll_top = highlighted - limit + 1
        self._scroll_top = max(0, min(self._scroll_top, total - limit))
        return range(self._scroll_top, self._scroll_top + limit)

    def render_text(self) -> str:
        """Plain-text rendering of the same fragments."""
        return "".join(frag[1] for frag in self.fragments()).rstrip("\n")

    def _click(self, element: Element) -> MouseHandler:
        def handler(mouse_event: MouseEvent) -> object:
            if mouse_event.event_type != MouseEventType.MOUSE_UP:
                return NotImplemented
            self._host.click(element)
            return None

        return handler

    def _row_handler(self, row: Element) -> MouseHandler:
        def handler(mouse_event: MouseEvent) -> object:
            if mouse_event.event_type == MouseEventType.MOUSE_MOVE:
                self._host.hover(row)
                return None
            if mouse_event.event_type == MouseEventType.MOUSE_UP:
                self._host.click(row)
                return None
            return NotImplemented

        return handler

