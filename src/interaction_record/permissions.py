"""Frozen permission bitsets for interaction members."""

from __future__ import annotations

from typing import Any

import discord

from .errors import InvalidPermissionData

__all__ = ["PermissionSnapshot", "parse_permissions"]


class PermissionSnapshot:
    """Read-only permission bitset computed once from raw member data.

    Flags are read by name, using the names ``discord.Permissions`` knows:

        >>> snapshot = PermissionSnapshot(8)
        >>> snapshot.administrator
        True
    """

    __slots__ = ("_value",)

    def __init__(self, value: int) -> None:
        object.__setattr__(self, "_value", value)

    @property
    def value(self) -> int:
        return self._value

    def has(self, *names: str) -> bool:
        """Check that every named flag is set."""
        return all(self._flag(name) for name in names)

    def to_discord(self) -> discord.Permissions:
        """Return a mutable copy; changing it leaves this snapshot untouched."""
        return discord.Permissions(self._value)

    def _flag(self, name: str) -> bool:
        bit = discord.Permissions.VALID_FLAGS.get(name)
        if bit is None:
            raise AttributeError(f"unknown permission flag {name!r}")
        return (self._value & bit) == bit

    def __getattr__(self, name: str) -> bool:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._flag(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("PermissionSnapshot is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("PermissionSnapshot is read-only")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PermissionSnapshot):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"<PermissionSnapshot value={self._value}>"


def parse_permissions(raw: object) -> PermissionSnapshot:
    """Parse a decimal bitset string (or int) into a snapshot."""
    if isinstance(raw, bool):
        raise InvalidPermissionData("permission bitset must not be a boolean", raw=raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdecimal():
        value = int(raw.strip())
    else:
        raise InvalidPermissionData(f"unparsable permission bitset {raw!r}", raw=raw)
    if value < 0:
        raise InvalidPermissionData(f"negative permission bitset {raw!r}", raw=raw)
    return PermissionSnapshot(value)
