import pytest
from prompt_toolkit.styles import Style

from ds_ui.tui.core import theme

pytestmark = pytest.mark.unit_ui


def test_select_style_covers_control_classes() -> None:
    styles = theme.prompt_toolkit_select_style()
    for key in (
        "container",
        "container.focused",
        "placeholder",
        "option-badge",
        "remove-btn",
        "clear-btn",
        "divider",
        "caret",
        "option",
        "option.selected",
        "option.highlighted",
    ):
        assert key in styles
    Style.from_dict(styles)


def test_select_style_is_a_copy() -> None:
    styles = theme.prompt_toolkit_select_style()
    styles["option"] = "fg:red"
    assert theme.SELECT_CLASS_STYLES["option"] != "fg:red"


def test_class_names_keeps_enabled_modifiers() -> None:
    assert theme.class_names("option") == "class:option"
    assert (
        theme.class_names("option", option__selected=True, option__highlighted=False)
        == "class:option class:option.selected"
    )
    assert theme.class_names("", container__focused=True) == "class:container.focused"


def test_presenter_message_levels() -> None:
    assert theme.presenter_message("error", "bad") == "[red]✖ bad[/red]"
    assert theme.presenter_message("other", "plain") == "plain"


def test_panel_title_wraps_accent() -> None:
    assert theme.RICH_ACCENT_BOLD in theme.panel_title("Selected")
