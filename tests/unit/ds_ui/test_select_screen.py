import pytest
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from ds_ui.tui.screens.select_screen import SelectScreen

pytestmark = pytest.mark.unit_ui


@pytest.fixture
def pipe():
    with create_pipe_input() as pipe_input:
        yield pipe_input


def _screen(options, pipe, **kwargs) -> SelectScreen:
    return SelectScreen(options, input=pipe, output=DummyOutput(), **kwargs)


def test_screen_focuses_control_on_start(abc_options, pipe) -> None:
    screen = _screen(abc_options, pipe)

    assert screen.host.focused is screen.controller.container_ref.current
    assert screen.controller.is_open is False


def test_screen_forwards_terminal_keys(abc_options, pipe) -> None:
    screen = _screen(abc_options, pipe)

    screen.press("down")
    assert screen.controller.is_open is True
    screen.press("down")
    assert screen.controller.highlighted_index == 1
    screen.press("enter")
    assert screen.value is abc_options[1]
    assert screen.controller.is_open is False


def test_screen_blur_closes_and_keeps_keys_working(abc_options, pipe) -> None:
    screen = _screen(abc_options, pipe)
    screen.press("space")

    screen.blur()
    assert screen.controller.is_open is False
    screen.press("space")
    assert screen.controller.is_open is True


def test_screen_clear_resets_multi_value(abc_options, pipe) -> None:
    screen = _screen(abc_options, pipe, multiple=True, value=[abc_options[0]])

    screen.clear()
    assert screen.value == []
    assert screen.controller.badges == []


def test_screen_run_returns_keyboard_pick(abc_options, pipe) -> None:
    screen = _screen(abc_options, pipe)
    pipe.send_text("\r")
    pipe.send_text("\x1b[B")
    pipe.send_text("\r")
    pipe.send_text("\x13")

    assert screen.run() is abc_options[1]
