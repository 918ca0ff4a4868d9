"""Selection strategies for the two select modes.

A strategy is resolved once from the props variant; controller code calls
it without re-checking the mode. Strategies only request changes through
the caller's callback and never mutate the caller's value.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from ds_ui.tui.system.models import (
    MultiSelectProps,
    SelectOption,
    SelectProps,
    SingleSelectProps,
)

logger = logging.getLogger(__name__)


class Selection(Protocol):
    multiple: bool

    def select(self, option: SelectOption) -> None: ...

    def clear(self) -> None: ...

    def is_selected(self, option: SelectOption) -> bool: ...

    def badges(self) -> Sequence[SelectOption]: ...

    def label(self) -> str | None: ...


class SingleSelection:
    multiple = False

    def __init__(self, props: SingleSelectProps) -> None:
        self._props = props

    def select(self, option: SelectOption) -> None:
        # Re-selecting the current option is a no-op; only clear deselects.
        if self._props.value is option:
            logger.debug("Option %r already selected", option.label)
            return
        logger.debug("Requesting single selection %r", option.label)
        self._props.on_change(option)

    def clear(self) -> None:
        self._props.on_change(None)

    def is_selected(self, option: SelectOption) -> bool:
        return self._props.value is option

    def badges(self) -> Sequence[SelectOption]:
        return ()

    def label(self) -> str | None:
        value = self._props.value
        return value.label if value is not None else None


class MultiSelection:
    multiple = True

    def __init__(self, props: MultiSelectProps) -> None:
        self._props = props

    def select(self, option: SelectOption) -> None:
        current = list(self._props.value)
        if self.is_selected(option):
            logger.debug("Requesting removal of %r", option.label)
            self._props.on_change([member for member in current if member is not option])
        else:
            logger.debug("Requesting addition of %r", option.label)
            self._props.on_change([*current, option])

    def clear(self) -> None:
        self._props.on_change([])

    def is_selected(self, option: SelectOption) -> bool:
        return any(member is option for member in self._props.value)

    def badges(self) -> Sequence[SelectOption]:
        return tuple(self._props.value)

    def label(self) -> str | None:
        return None


def selection_for(props: SelectProps) -> Selection:
    if isinstance(props, MultiSelectProps):
        return MultiSelection(props)
    return SingleSelection(props)
