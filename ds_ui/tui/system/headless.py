from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from ds_common.errors import ConfigurationError
from ds_ui.config import SelectSettings
from ds_ui.tui.core.controller import SelectController
from ds_ui.tui.core.host import Element, Host, normalize_key
from ds_ui.tui.system.components.select_view import SelectView
from ds_ui.tui.system.models import SelectOption, SelectProps, SelectState, build_select_props

logger = logging.getLogger(__name__)

SCRIPT_KEYS = frozenset({"Enter", "Space", "ArrowUp", "ArrowDown", "Escape"})


@dataclass
class HeadlessSelect:
    """A select control mounted on an in-memory host with its own caller state.

    Plays the caller's role: keeps the current value, records every
    ``on_change`` payload in ``changes`` and feeds new props back.
    """

    options: Sequence[SelectOption]
    multiple: bool = False
    value: Any = None
    settings: SelectSettings | None = None
    changes: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.multiple and self.value is None:
            self.value = []
        self.host = Host()
        self.controller = SelectController(self._props())
        self.view = SelectView(self.controller, self.host, self.settings)
        self.host.mount(self.controller)

    def _props(self) -> SelectProps:
        return build_select_props(
            self.options,
            self.value,
            self._on_change,
            multiple=self.multiple,
        )

    def _on_change(self, value: Any) -> None:
        self.changes.append(value)
        self.value = value
        self.controller.update(self._props())

    @property
    def container(self) -> Element:
        container = self.controller.container_ref.current
        if container is None:
            raise ConfigurationError("Headless select is not mounted")
        return container

    @property
    def state(self) -> SelectState:
        return self.controller.state

    @property
    def is_open(self) -> bool:
        return self.controller.is_open

    @property
    def highlighted_index(self) -> int:
        return self.controller.highlighted_index

    def set_options(self, options: Sequence[SelectOption]) -> None:
        """Replace the option list, as a caller reloading data would."""
        self.options = options
        self.controller.update(self._props())

    def focus(self) -> None:
        self.host.focus(self.container)

    def blur(self) -> None:
        self.host.blur()

    def click_container(self) -> None:
        self.host.click(self.container)

    def click_option(self, index: int) -> None:
        self.host.click(self.controller.rows[index])

    def hover_option(self, index: int) -> None:
        self.host.hover(self.controller.rows[index])

    def click_clear(self) -> None:
        self.host.click(self.controller.clear_button)

    def click_badge(self, target: int | SelectOption) -> None:
        if isinstance(target, int):
            badge = self.controller.badges[target]
        else:
            badge = next(b for b in self.controller.badges if b.data is target)
        self.host.click(badge)

    def press(self, key: str) -> None:
        self.host.press(normalize_key(key))

    def run_script(self, tokens: Iterable[str]) -> Any:
        """Replay tokens such as ``click``, ``option:1``, ``down`` and return the value."""
        for raw in tokens:
            token = raw.strip()
            if not token:
                continue
            action, _, arg = token.partition(":")
            action = action.lower()
            logger.debug("Headless step %s", token)
            if action == "click":
                self.click_container()
            elif action == "blur":
                self.blur()
            elif action == "focus":
                self.focus()
            elif action == "clear":
                self.click_clear()
            elif action in {"option", "hover", "badge"}:
                index = self._parse_index(token, arg)
                if action == "option":
                    self.click_option(index)
                elif action == "hover":
                    self.hover_option(index)
                else:
                    self.click_badge(index)
            elif normalize_key(token) in SCRIPT_KEYS:
                self.press(token)
            else:
                raise ConfigurationError("Unknown script step", context={"step": token})
        return self.value

    def render_text(self) -> str:
        return self.view.render_text()

    def close(self) -> None:
        self.host.unmount(self.controller)

    def _parse_index(self, token: str, arg: str) -> int:
        try:
            index = int(arg)
        except ValueError as exc:
            raise ConfigurationError(
                "Script step needs an integer index", context={"step": token}, cause=exc
            ) from exc
        limit = len(self.controller.badges) if token.lower().startswith("badge") else len(self.controller.rows)
        if not 0 <= index < limit:
            raise ConfigurationError(
                "Script step index out of range",
                context={"step": token, "limit": limit},
            )
        return index
