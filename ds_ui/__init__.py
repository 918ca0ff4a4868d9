"""Dropdown select control: selection controller, terminal UI and CLI."""

from ds_ui.tui.core.controller import SelectController
from ds_ui.tui.system.models import SelectOption, build_select_props

__all__ = ["SelectController", "SelectOption", "build_select_props"]
