import importlib
import json

import pytest
from typer.testing import CliRunner

from ds_common.errors import ConfigurationError

# ``ds_ui.cli.main`` is shadowed by the ``main`` entry point re-exported from the package.
cli = importlib.import_module("ds_ui.cli.main")

pytestmark = pytest.mark.unit_ui

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def test_parse_option_spec_converts_numbers() -> None:
    option = cli.parse_option_spec(" Small = 1 ")
    assert option.label == "Small"
    assert option.value == 1
    assert cli.parse_option_spec("Large=xl").value == "xl"
    assert cli.parse_option_spec("Half=0.5").value == 0.5
    assert cli.parse_option_spec("Host=a.b").value == "a.b"


@pytest.mark.parametrize("spec", ["nolabel", "=1", "A="])
def test_parse_option_spec_rejects_malformed(spec) -> None:
    with pytest.raises(ConfigurationError):
        cli.parse_option_spec(spec)


def test_headless_single_pick_as_json() -> None:
    result = runner.invoke(
        cli.app,
        ["pick", "-o", "A=1", "-o", "B=two", "--headless", "--keys", "click,down,enter", "--json"],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"label": "B", "value": "two"}


def test_headless_multi_pick_as_json() -> None:
    result = runner.invoke(
        cli.app,
        ["pick", "-m", "-o", "A=1", "-o", "B=2", "-o", "C=3", "--headless", "--keys", "option:2,option:0", "--json"],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [{"label": "C", "value": 3}, {"label": "A", "value": 1}]


def test_headless_single_pick_rich_output() -> None:
    result = runner.invoke(cli.app, ["pick", "-o", "A=1", "-o", "B=2", "--headless", "--keys", "option:1"])
    assert result.exit_code == 0
    assert "B (2)" in result.stdout


def test_headless_multi_pick_rich_table() -> None:
    result = runner.invoke(
        cli.app,
        ["pick", "--multiple", "-o", "A=1", "-o", "B=2", "--headless", "--keys", "option:0,option:1"],
    )
    assert result.exit_code == 0
    assert "Selected" in result.stdout
    assert "A" in result.stdout
    assert "B" in result.stdout


def test_nothing_selected_warning() -> None:
    result = runner.invoke(cli.app, ["pick", "-o", "A=1", "--headless"])
    assert result.exit_code == 0
    assert "Nothing selected" in result.stdout


def test_nothing_selected_json_is_null() -> None:
    result = runner.invoke(cli.app, ["pick", "-o", "A=1", "--headless", "--keys", "click,esc", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) is None


@pytest.mark.parametrize(
    "args",
    [
        ["pick", "--headless"],
        ["pick", "-o", "broken", "--headless"],
        ["pick", "-o", "A=1", "--headless", "--keys", "click,teleport"],
        ["pick", "-o", "A=1", "--headless", "--keys", "option:5"],
        ["pick", "-o", "A=1"],
    ],
)
def test_pick_failures_exit_with_one(args) -> None:
    result = runner.invoke(cli.app, args)
    assert result.exit_code == 1


def test_invalid_settings_exit_with_one(monkeypatch) -> None:
    monkeypatch.setenv("DS_SELECT_MAX_VISIBLE", "0")
    result = runner.invoke(cli.app, ["pick", "-o", "A=1", "--headless"])
    assert result.exit_code == 1


def test_debug_flag_reaches_logging(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: calls.append(kwargs))

    result = runner.invoke(cli.app, ["--debug", "pick", "-o", "A=1", "--headless"])
    assert result.exit_code == 0
    assert calls == [{"debug": True, "force": True}]


def test_json_failure_prints_error_payload() -> None:
    result = runner.invoke(cli.app, ["pick", "-o", "A=1", "--headless", "--keys", "click,teleport", "--json"])
    assert result.exit_code == 1
    assert json.loads(result.stdout) == {
        "error_type": "ConfigurationError",
        "error": "Unknown script step",
        "error_context": {"step": "teleport"},
    }


def test_json_failure_includes_cause(monkeypatch) -> None:
    monkeypatch.setenv("DS_SELECT_MAX_VISIBLE", "0")
    result = runner.invoke(cli.app, ["pick", "-o", "A=1", "--headless", "--json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["error_type"] == "ConfigurationError"
    assert payload["error_cause"].startswith("ValidationError")
