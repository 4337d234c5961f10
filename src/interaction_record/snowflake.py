"""Snowflake id helpers."""

from __future__ import annotations

import re
from datetime import datetime

from discord.utils import DISCORD_EPOCH
from discord.utils import snowflake_time as _snowflake_time

SNOWFLAKE_PATTERN = re.compile(r"^\d{1,20}$")
SNOWFLAKE_MAX = 2**64 - 1


def is_snowflake(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 <= value <= SNOWFLAKE_MAX
    if not isinstance(value, str) or SNOWFLAKE_PATTERN.match(value) is None:
        return False
    return int(value) <= SNOWFLAKE_MAX


def snowflake_timestamp(snowflake: str | int) -> int:
    """Milliseconds since the Unix epoch encoded in a snowflake."""
    return (int(snowflake) >> 22) + DISCORD_EPOCH


def snowflake_time(snowflake: str | int) -> datetime:
    """Aware UTC datetime encoded in a snowflake."""
    return _snowflake_time(int(snowflake))
