"""Stable UI API surface."""

from __future__ import annotations

from ds_ui.cli import app, main
from ds_ui.config import SelectSettings
from ds_ui.tui.core.controller import SelectController
from ds_ui.tui.core.host import Effect, Element, ElementRef, Host, StateCell, UIEvent
from ds_ui.tui.screens.select_screen import SelectScreen
from ds_ui.tui.system.components.select_view import SelectView
from ds_ui.tui.system.headless import HeadlessSelect
from ds_ui.tui.system.models import (
    MultiSelectProps,
    SelectOption,
    SelectProps,
    SelectState,
    SingleSelectProps,
    build_select_props,
)

__all__ = [
    "app",
    "main",
    "SelectSettings",
    "SelectController",
    "Effect",
    "Element",
    "ElementRef",
    "Host",
    "StateCell",
    "UIEvent",
    "SelectScreen",
    "SelectView",
    "HeadlessSelect",
    "MultiSelectProps",
    "SelectOption",
    "SelectProps",
    "SelectState",
    "SingleSelectProps",
    "build_select_props",
]
