"""Cache context consumed by interaction records."""

from __future__ import annotations

import threading
from typing import Any, Protocol

from .types import Channel, Guild, Member, User


class GuildLike(Protocol):
    id: str

    def upsert_member(self, data: dict[str, Any], *, user: User | None = None) -> Member: ...


class CacheContext(Protocol):
    """Lookups and upserts an interaction record needs from its runtime."""

    def get_user(self, user_id: str) -> User | None: ...

    def upsert_user(self, data: dict[str, Any]) -> User: ...

    def get_guild(self, guild_id: str) -> GuildLike | None: ...

    def get_channel(self, channel_id: str) -> Channel | None: ...


class MemoryCache:
    """In-process cache of users, guilds and channels keyed by id.

    Upserts hold a lock so insert-or-update stays atomic when events for the
    same user arrive from more than one thread.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._guilds: dict[str, Guild] = {}
        self._channels: dict[str, Channel] = {}

    @property
    def users(self) -> dict[str, User]:
        return dict(self._users)

    @property
    def guilds(self) -> dict[str, Guild]:
        return dict(self._guilds)

    @property
    def channels(self) -> dict[str, Channel]:
        return dict(self._channels)

    def get_user(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def upsert_user(self, data: dict[str, Any]) -> User:
        user_id = str(data["id"])
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                user = User.from_data(data)
                self._users[user_id] = user
            else:
                user.update(data)
            return user

    def get_guild(self, guild_id: str) -> Guild | None:
        return self._guilds.get(guild_id)

    def add_guild(self, guild_id: str, *, name: str | None = None) -> Guild:
        with self._lock:
            guild = self._guilds.get(guild_id)
            if guild is None:
                guild = Guild(guild_id, name=name, lock=self._lock)
                self._guilds[guild_id] = guild
            elif name is not None:
                guild.name = name
            return guild

    def remove_guild(self, guild_id: str) -> Guild | None:
        with self._lock:
            return self._guilds.pop(guild_id, None)

    def get_channel(self, channel_id: str) -> Channel | None:
        return self._channels.get(channel_id)

    def add_channel(
        self,
        channel_id: str,
        *,
        name: str | None = None,
        guild_id: str | None = None,
        type: int | None = None,
    ) -> Channel:
        channel = Channel(id=channel_id, name=name, guild_id=guild_id, type=type)
        with self._lock:
            self._channels[channel_id] = channel
        return channel

    def remove_channel(self, channel_id: str) -> Channel | None:
        with self._lock:
            return self._channels.pop(channel_id, None)
