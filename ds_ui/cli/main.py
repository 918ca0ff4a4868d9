"""
Command-line interface for dropdown-select.

Runs a single or multi select either interactively (prompt_toolkit) or from a
scripted key sequence for CI and demos.
"""

from __future__ import annotations

import json
import sys
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ds_common.errors import ConfigurationError, DSError, error_to_payload
from ds_common.logging import configure_logging
from ds_ui.config import SelectSettings
from ds_ui.tui.core import theme
from ds_ui.tui.screens.select_screen import SelectScreen
from ds_ui.tui.system.headless import HeadlessSelect
from ds_ui.tui.system.models import SelectOption

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(help="Pick values from a dropdown select in the terminal.", no_args_is_help=True)


def parse_option_spec(spec: str) -> SelectOption:
    """Parse ``LABEL=VALUE``; numeric values become ints or floats."""
    label, sep, raw_value = spec.partition("=")
    label = label.strip()
    raw_value = raw_value.strip()
    if not sep or not label or not raw_value:
        raise ConfigurationError("Options must look like LABEL=VALUE", context={"option": spec})
    value: str | int | float
    try:
        value = float(raw_value) if "." in raw_value else int(raw_value)
    except ValueError:
        value = raw_value
    return SelectOption(label=label, value=value)


def _option_payload(option: SelectOption) -> dict[str, Any]:
    return {"label": option.label, "value": option.value}


def _print_result(result: Any, *, multiple: bool, as_json: bool) -> None:
    if as_json:
        if multiple:
            payload: Any = [_option_payload(option) for option in result or []]
        else:
            payload = _option_payload(result) if result is not None else None
        typer.echo(json.dumps(payload))
        return

    if not result:
        console.print(theme.presenter_message("warning", "Nothing selected"))
        return
    if not multiple:
        console.print(
            theme.presenter_message("success", f"{escape(result.label)} ({escape(str(result.value))})")
        )
        return
    table = Table(title=theme.panel_title("Selected"), border_style=theme.RICH_BORDER_STYLE)
    table.add_column("Label")
    table.add_column("Value")
    for option in result:
        table.add_row(escape(option.label), escape(str(option.value)))
    console.print(table)


@app.callback()
def entry(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Global options."""
    configure_logging(debug=debug, force=True)


@app.command("pick")
def pick(
    option: Optional[List[str]] = typer.Option(
        None,
        "--option",
        "-o",
        help="Option as LABEL=VALUE; repeat for each option.",
    ),
    multiple: bool = typer.Option(False, "--multiple", "-m", help="Allow selecting several options."),
    headless: bool = typer.Option(False, "--headless", help="Replay --keys instead of opening the TUI."),
    keys: str = typer.Option(
        "",
        "--keys",
        help="Comma-separated headless script: click, blur, focus, clear, option:N, hover:N, badge:N, enter, space, up, down, esc.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result, or the error, as JSON."),
    title: str = typer.Option("Select", "--title", help="Title shown above the control."),
) -> None:
    """Pick one option (or several with --multiple)."""
    try:
        if not option:
            raise ConfigurationError("At least one --option is required")
        options = [parse_option_spec(spec) for spec in option]
        settings = SelectSettings.from_env()
        if headless:
            select = HeadlessSelect(options, multiple=multiple, settings=settings)
            result = select.run_script(keys.split(","))
        else:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                raise ConfigurationError("Interactive mode needs a terminal; use --headless")
            result = SelectScreen(options, multiple=multiple, title=title, settings=settings).run()
    except DSError as exc:
        if as_json:
            typer.echo(json.dumps(error_to_payload(exc)))
        else:
            err_console.print(theme.presenter_message("error", escape(str(exc))))
        raise typer.Exit(1) from exc
    _print_result(result, multiple=multiple, as_json=as_json)


def main() -> None:
    app()
