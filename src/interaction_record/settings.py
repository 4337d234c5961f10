"""Settings for building interaction records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import msgspec
from takopi.config import ConfigError


class InteractionSettings(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Knobs the host runtime can set for record construction."""

    # Reject interaction ids that are not decimal snowflakes.
    strict_snowflake: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> InteractionSettings:
        """Build settings from a config table (for example a parsed TOML section)."""
        if data is None:
            return cls()
        try:
            return msgspec.convert(dict(data), type=cls)
        except msgspec.ValidationError as exc:
            raise ConfigError(f"Invalid interaction settings: {exc}") from exc


DEFAULT_SETTINGS = InteractionSettings()
