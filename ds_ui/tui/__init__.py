"""
Terminal UI package: host primitives, the select controller and its renderers.
"""

from ds_ui.tui.core.controller import SelectController
from ds_ui.tui.screens.select_screen import SelectScreen
from ds_ui.tui.system.headless import HeadlessSelect

__all__ = ["SelectController", "SelectScreen", "HeadlessSelect"]
