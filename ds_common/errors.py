"""Errors raised by the select control, its host and the CLI."""

from __future__ import annotations

from typing import Any, Mapping

_SCALARS = (str, int, float, bool)


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, Mapping):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_json_safe(item) for item in value]
    return str(value)


class DSError(Exception):
    """Base error; ``context`` only ever holds JSON-safe values."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = _json_safe(dict(context or {}))
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return type(self).__name__


class ConfigurationError(DSError):
    """Invalid settings, option specs or headless scripts."""


class SelectContractError(ConfigurationError):
    """Select props whose value or callback shape disagrees with the mode tag."""


class HostError(DSError):
    """Misuse of host primitives (mounting, dispatching, unmounted components)."""


def error_to_payload(error: DSError) -> dict[str, Any]:
    """Flatten an error for ``--json`` output."""
    payload: dict[str, Any] = {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
    if error.__cause__ is not None:
        payload["error_cause"] = f"{type(error.__cause__).__name__}: {error.__cause__}"
    return payload
