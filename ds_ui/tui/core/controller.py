"""Selection controller for the dropdown select control.

The controller owns the open flag and the highlighted index. The selection
value belongs to the caller: the controller reads it from props and asks for
changes through ``on_change``. Callers hand back new props with ``update``.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ds_common.errors import HostError, SelectContractError
from ds_ui.tui.core.host import (
    Cleanup,
    Effect,
    Element,
    ElementRef,
    Host,
    StateCell,
    UIEvent,
    same_value,
)
from ds_ui.tui.core.selection import Selection, selection_for
from ds_ui.tui.system.models import SelectOption, SelectProps, SelectState

logger = logging.getLogger(__name__)

TOGGLE_KEYS = frozenset({"Enter", "Space"})
ARROW_KEYS = frozenset({"ArrowUp", "ArrowDown"})
_UNRENDERED = object()


class SelectController:
    def __init__(self, props: SelectProps) -> None:
        self._props = props
        self._selection: Selection = selection_for(props)
        self._host: Host | None = None
        self._is_open: StateCell[bool] | None = None
        self._highlighted: StateCell[int] | None = None
        self._keyboard = Effect(self._register_keyboard)
        self._rows_for: object = _UNRENDERED
        self._badges_for: object = _UNRENDERED

        self.container_ref = ElementRef()
        self.value_region = Element("value", classes=["value"])
        self.clear_button = Element("clear-btn", classes=["clear-btn"])
        self.divider = Element("divider", classes=["divider"])
        self.caret = Element("caret", classes=["caret"])
        self.options_list = Element("options", classes=["options"])
        self.rows: list[Element] = []
        self.badges: list[Element] = []

    # -- props -----------------------------------------------------------

    @property
    def props(self) -> SelectProps:
        return self._props

    @property
    def multiple(self) -> bool:
        return self._props.multiple

    @property
    def options(self) -> Sequence[SelectOption]:
        return self._props.options

    @property
    def value(self) -> SelectOption | Sequence[SelectOption] | None:
        return self._props.value

    @property
    def selection(self) -> Selection:
        return self._selection

    def update(self, props: SelectProps) -> None:
        """Swap in new caller props (new value, reloaded options)."""
        if props.multiple != self._props.multiple:
            raise SelectContractError(
                "Select mode cannot change after construction",
                context={"was_multiple": self._props.multiple, "multiple": props.multiple},
            )
        self._props = props
        self._selection = selection_for(props)
        if self._host is not None:
            self._host.request_commit()

    # -- ui state --------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._cells()[0].value

    @property
    def highlighted_index(self) -> int:
        return self._cells()[1].value

    @property
    def state(self) -> SelectState:
        is_open, highlighted = self._cells()
        return SelectState(is_open=is_open.value, highlighted_index=highlighted.value)

    def is_highlighted(self, index: int) -> bool:
        return index == self.highlighted_index

    def is_option_selected(self, option: SelectOption) -> bool:
        return self._selection.is_selected(option)

    def _cells(self) -> tuple[StateCell[bool], StateCell[int]]:
        if self._is_open is None or self._highlighted is None:
            raise HostError("SelectController is not mounted")
        return self._is_open, self._highlighted

    # -- selection -------------------------------------------------------

    def select_option(self, option: SelectOption) -> None:
        self._selection.select(option)

    def clear_options(self) -> None:
        logger.debug("Clearing selection")
        self._selection.clear()

    # -- event handlers --------------------------------------------------

    def on_container_click(self, event: UIEvent) -> None:
        is_open, _ = self._cells()
        is_open.set(lambda prev: not prev)
        logger.debug("Container click, open=%s", is_open.value)

    def on_container_blur(self, event: UIEvent) -> None:
        is_open, _ = self._cells()
        is_open.set(False)

    def on_option_click(self, option: SelectOption, event: UIEvent) -> None:
        is_open, _ = self._cells()
        event.stop_propagation()
        self.select_option(option)
        is_open.set(False)

    def on_option_mouse_enter(self, index: int) -> None:
        _, highlighted = self._cells()
        highlighted.set(index)

    def on_clear_click(self, event: UIEvent) -> None:
        event.stop_propagation()
        self.clear_options()

    def on_badge_click(self, option: SelectOption, event: UIEvent) -> None:
        event.stop_propagation()
        self.select_option(option)

    def _register_keyboard(self) -> Cleanup | None:
        container = self.container_ref.current
        if container is None:
            return None
        is_open_cell, highlighted_cell = self._cells()
        # Values as of registration; the effect re-registers when they change.
        is_open = is_open_cell.value
        highlighted = highlighted_cell.value
        options = self._props.options

        def on_keydown(event: UIEvent) -> None:
            if event.target is not container:
                return
            key = event.key
            if key in TOGGLE_KEYS:
                is_open_cell.set(lambda prev: not prev)
                # Selection follows the flag captured before the toggle.
                if is_open and 0 <= highlighted < len(options):
                    self.select_option(options[highlighted])
            elif key in ARROW_KEYS:
                if not is_open:
                    is_open_cell.set(True)
                    return
                moved = highlighted + (1 if key == "ArrowDown" else -1)
                if 0 <= moved < len(options):
                    highlighted_cell.set(moved)
                    logger.debug("Highlight moved to %d", moved)
            elif key == "Escape":
                is_open_cell.set(False)

        container.add_event_listener("keydown", on_keydown)
        logger.debug("Keyboard listener registered (open=%s, highlighted=%d)", is_open, highlighted)

        def release() -> None:
            container.remove_event_listener("keydown", on_keydown)
            logger.debug("Keyboard listener released")

        return release

    # -- host lifecycle --------------------------------------------------

    def mount(self, host: Host) -> None:
        if self._host is not None:
            raise HostError("SelectController is already mounted")
        self._host = host
        self._is_open = host.state(False)
        self._highlighted = host.state(0)

        container = Element("container", classes=["container"], focusable=True)
        for child in (
            self.value_region,
            self.clear_button,
            self.divider,
            self.caret,
            self.options_list,
        ):
            container.append(child)
        container.add_event_listener("click", self.on_container_click)
        container.add_event_listener("blur", self.on_container_blur)
        self.clear_button.add_event_listener("click", self.on_clear_click)
        self.container_ref.current = container
        self._rows_for = _UNRENDERED
        self._badges_for = _UNRENDERED

    def commit(self) -> None:
        if self._host is None:
            return
        if not same_value(self._props.options, self._rows_for):
            self._build_rows()
            self._rows_for = self._props.options
        if not same_value(self._props.value, self._badges_for):
            self._build_badges()
            self._badges_for = self._props.value
        is_open, highlighted = self._cells()
        self._keyboard.sync((is_open.value, highlighted.value, self._props.options))

    def unmount(self) -> None:
        self._keyboard.release()
        container = self.container_ref.current
        if container is not None:
            container.remove_event_listener("click", self.on_container_click)
            container.remove_event_listener("blur", self.on_container_blur)
            container.clear_children()
        self.clear_button.remove_event_listener("click", self.on_clear_click)
        self.container_ref.current = None
        self._host = None
        self._is_open = None
        self._highlighted = None
        self._rows_for = _UNRENDERED
        self._badges_for = _UNRENDERED

    def _build_rows(self) -> None:
        self.options_list.clear_children()
        self.rows = []
        for index, option in enumerate(self._props.options):
            row = Element(f"option:{index}", classes=["option"], data=option)
            row.add_event_listener(
                "click", lambda event, option=option: self.on_option_click(option, event)
            )
            row.add_event_listener(
                "mouseenter", lambda event, index=index: self.on_option_mouse_enter(index)
            )
            self.options_list.append(row)
            self.rows.append(row)

    def _build_badges(self) -> None:
        self.value_region.clear_children()
        self.badges = []
        for index, option in enumerate(self._selection.badges()):
            badge = Element(f"badge:{index}", classes=["option-badge"], data=option)
            badge.add_event_listener(
                "click", lambda event, option=option: self.on_badge_click(option, event)
            )
            self.value_region.append(badge)
            self.badges.append(badge)
