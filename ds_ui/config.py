"""Display settings for the select control."""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ds_common.config.env import parse_int_env
from ds_common.errors import ConfigurationError

_ENV_FIELDS: dict[str, str] = {
    "placeholder": "DS_SELECT_PLACEHOLDER",
    "clear_glyph": "DS_SELECT_CLEAR_GLYPH",
    "remove_glyph": "DS_SELECT_REMOVE_GLYPH",
    "caret_glyph": "DS_SELECT_CARET_GLYPH",
}


class SelectSettings(BaseModel):
    """Glyphs and sizing used when rendering a select control."""

    placeholder: str = Field(default="")
    clear_glyph: str = Field(default="×", min_length=1)
    remove_glyph: str = Field(default="×", min_length=1)
    caret_glyph: str = Field(default="▾", min_length=1)
    max_visible_options: int = Field(default=10, ge=1)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SelectSettings":
        """Build settings from ``DS_SELECT_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for field_name, env_name in _ENV_FIELDS.items():
            if env_name in env:
                data[field_name] = env[env_name]
        raw_max = env.get("DS_SELECT_MAX_VISIBLE")
        if raw_max is not None:
            parsed = parse_int_env(raw_max)
            if parsed is None:
                raise ConfigurationError(
                    "DS_SELECT_MAX_VISIBLE must be an integer",
                    context={"value": raw_max},
                )
            data["max_visible_options"] = parsed
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid select settings",
                context={"fields": sorted(data)},
                cause=exc,
            ) from exc
