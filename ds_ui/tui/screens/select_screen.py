from __future__ import annotations

import logging
from typing import Any, Sequence

from prompt_toolkit.application import Application
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.output import Output
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from ds_ui.config import SelectSettings
from ds_ui.tui.core import theme
from ds_ui.tui.core.controller import SelectController
from ds_ui.tui.core.host import Element, Host, normalize_key
from ds_ui.tui.system.components.select_view import SelectView
from ds_ui.tui.system.models import SelectOption, SelectProps, build_select_props

logger = logging.getLogger(__name__)

HINT = "Enter/Space=open or pick, Up/Down=move, Esc=close, Tab=blur, Ctrl+X=clear, Ctrl+S=done, Ctrl+C=cancel"

FORWARDED_KEYS = ("enter", "space", "up", "down", "escape")


class SelectScreen:
    """Full prompt_toolkit application around one select control.

    The screen is the caller: it owns the selection value and hands new props
    to the controller whenever ``on_change`` fires.
    """

    def __init__(
        self,
        options: Sequence[SelectOption],
        *,
        multiple: bool = False,
        value: Any = None,
        title: str = "Select",
        settings: SelectSettings | None = None,
        input: Input | None = None,
        output: Output | None = None,
    ) -> None:
        self._options = options
        self._multiple = multiple
        self.value: Any = [] if multiple and value is None else value

        self.host = Host()
        self.controller = SelectController(self._props())
        self.view = SelectView(self.controller, self.host, settings)
        self.host.mount(self.controller)
        self.host.focus(self._container())

        self.control = FormattedTextControl(self.view.fragments, focusable=True, show_cursor=False)
        self._kb = self._bindings()

        root_container = Frame(
            HSplit(
                [
                    Window(height=1, content=FormattedTextControl(self._hint), style="class:placeholder"),
                    Window(self.control),
                ]
            ),
            title=title,
        )
        self._app: Application = Application(
            layout=Layout(root_container, focused_element=self.control),
            key_bindings=self._kb,
            style=Style.from_dict(theme.prompt_toolkit_select_style()),
            mouse_support=True,
            full_screen=False,
            input=input,
            output=output,
        )

    def run(self) -> Any:
        return self._app.run()

    def _props(self) -> SelectProps:
        return build_select_props(
            self._options,
            self.value,
            self._on_change,
            multiple=self._multiple,
        )

    def _on_change(self, value: Any) -> None:
        self.value = value
        self.controller.update(self._props())

    def _container(self) -> Element:
        container = self.controller.container_ref.current
        assert container is not None
        return container

    def _hint(self) -> list[tuple[str, str]]:
        return [("", HINT)]

    def press(self, ptk_key: str) -> None:
        """Forward a prompt_toolkit key name to the focused host element."""
        self.host.press(normalize_key(ptk_key))
        self._app.invalidate()

    def blur(self) -> None:
        # Tab leaves the control and comes straight back so keys keep working.
        self.host.blur()
        self.host.focus(self._container())
        self._app.invalidate()

    def clear(self) -> None:
        self.host.click(self.controller.clear_button)
        self._app.invalidate()

    def _bindings(self) -> KeyBindings:
        kb = KeyBindings()

        for ptk_key in FORWARDED_KEYS:

            @kb.add(ptk_key)
            def _(event: Any, ptk_key: str = ptk_key) -> None:
                self.press(ptk_key)

        @kb.add("tab")
        def _(event: Any) -> None:
            self.blur()

        @kb.add("c-x")
        def _(event: Any) -> None:
            self.clear()

        @kb.add("c-s")
        def _(event: Any) -> None:
            self._exit(self.value)

        @kb.add("c-c")
        def _(event: Any) -> None:
            self._exit(None)

        return kb

    def _exit(self, result: Any) -> None:
        logger.debug("Select screen exiting with %r", result)
        try:
            self._app.exit(result=result)
        except Exception as exc:  # pragma: no cover
            if "Return value already set" not in str(exc):
                raise
