from __future__ import annotations

from typing import Mapping

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

SELECT_CLASS_STYLES: dict[str, str] = {
    "container": "bg:#ffffff fg:#000000",
    "container.focused": "bg:#ffffff fg:#000000 bold",
    "value": "",
    "placeholder": "fg:#888888 italic",
    "option-badge": "bg:#dddddd fg:#000000",
    "remove-btn": "fg:#aa0000 bold",
    "clear-btn": "fg:#777777 bold",
    "divider": "fg:#777777",
    "caret": "fg:#777777",
    "options": "",
    "options.show": "bg:#ffffff",
    "option": "fg:#000000",
    "option.selected": "bg:#0000aa fg:white bold",
    "option.highlighted": "bg:#aaaaff fg:#000000",
}

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}


def class_names(*names: str, **conditional: bool) -> str:
    """Join prompt_toolkit ``class:`` names, keeping conditional ones that are true.

    Conditional keyword names use ``__`` for ``.`` (``option__selected``).
    """
    parts = [name for name in names if name]
    parts.extend(name.replace("__", ".") for name, enabled in conditional.items() if enabled)
    return " ".join(f"class:{name}" for name in parts)


def prompt_toolkit_select_style() -> Mapping[str, str]:
    return dict(SELECT_CLASS_STYLES)


def panel_title(text: str) -> str:
    return f"[{RICH_ACCENT_BOLD}]{text}[/{RICH_ACCENT_BOLD}]"


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)
