"""Public API surface for ds_common."""

from ds_common.errors import (
    ConfigurationError,
    DSError,
    HostError,
    SelectContractError,
    error_to_payload,
)
from ds_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "DSError",
    "HostError",
    "SelectContractError",
    "error_to_payload",
]
