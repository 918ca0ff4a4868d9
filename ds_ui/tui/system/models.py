from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Sequence, TypeAlias, Union

from ds_common.errors import SelectContractError


@dataclass(frozen=True, eq=False)
class SelectOption:
    """One selectable entry.

    Equality and hashing are by identity: two options with the same label and
    value are still different options.
    """

    label: str
    value: str | int | float


SingleChange: TypeAlias = Callable[[SelectOption | None], None]
MultiChange: TypeAlias = Callable[[list[SelectOption]], None]


@dataclass(frozen=True)
class SingleSelectProps:
    options: Sequence[SelectOption]
    value: SelectOption | None
    on_change: SingleChange

    multiple: ClassVar[bool] = False


@dataclass(frozen=True)
class MultiSelectProps:
    options: Sequence[SelectOption]
    value: Sequence[SelectOption]
    on_change: MultiChange

    multiple: ClassVar[bool] = True


SelectProps: TypeAlias = Union[SingleSelectProps, MultiSelectProps]


@dataclass(frozen=True)
class SelectState:
    is_open: bool
    highlighted_index: int


def _check_options(options: Any) -> Sequence[SelectOption]:
    if isinstance(options, (str, bytes)) or not isinstance(options, Iterable):
        raise SelectContractError(
            "options must be a sequence of SelectOption",
            context={"options_type": type(options).__name__},
        )
    # Snapshot: a caller editing its list in place must pass it back to take effect.
    checked = tuple(options)
    for index, option in enumerate(checked):
        if not isinstance(option, SelectOption):
            raise SelectContractError(
                "options must contain only SelectOption instances",
                context={"index": index, "type": type(option).__name__},
            )
    return checked


def _check_multi_value(value: Any) -> list[SelectOption]:
    if isinstance(value, (str, bytes, SelectOption)) or not isinstance(value, Iterable):
        raise SelectContractError(
            "multi mode requires a sequence of SelectOption as value",
            context={"value_type": type(value).__name__},
        )
    members = list(value)
    seen: set[int] = set()
    for index, member in enumerate(members):
        if not isinstance(member, SelectOption):
            raise SelectContractError(
                "multi mode value must contain only SelectOption instances",
                context={"index": index, "type": type(member).__name__},
            )
        if id(member) in seen:
            raise SelectContractError(
                "multi mode value contains the same option twice",
                context={"index": index, "label": member.label},
            )
        seen.add(id(member))
    return members


def build_select_props(
    options: Sequence[SelectOption],
    value: Any,
    on_change: Callable[[Any], None],
    *,
    multiple: bool = False,
) -> SelectProps:
    """Validate a props triple against its mode tag and build the tagged variant.

    This is the only place the mode/value/callback pairing is checked;
    everything downstream trusts the variant it receives.
    """
    if not callable(on_change):
        raise SelectContractError(
            "on_change must be callable",
            context={"on_change_type": type(on_change).__name__},
        )
    checked_options = _check_options(options)
    if multiple:
        return MultiSelectProps(
            options=checked_options,
            value=_check_multi_value(value),
            on_change=on_change,
        )
    if value is not None and not isinstance(value, SelectOption):
        raise SelectContractError(
            "single mode requires a SelectOption or None as value",
            context={"value_type": type(value).__name__},
        )
    return SingleSelectProps(options=checked_options, value=value, on_change=on_change)
