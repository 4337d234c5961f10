"""Type definitions for Discord interaction records."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Protocol


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class ApplicationCommandType(IntEnum):
    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    SELECT_MENU = 3
    TEXT_INPUT = 4
    USER_SELECT = 5
    ROLE_SELECT = 6
    MENTIONABLE_SELECT = 7
    CHANNEL_SELECT = 8


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


class User:
    """Discord user owned by the user cache.

    Instances are live references: a later upsert for the same id merges the
    keys it carries into this object and leaves the other fields alone.
    """

    __slots__ = ("id", "username", "global_name", "discriminator", "avatar", "bot")

    def __init__(
        self,
        id: str,
        username: str | None = None,
        global_name: str | None = None,
        discriminator: str | None = None,
        avatar: str | None = None,
        bot: bool = False,
    ) -> None:
        self.id = id
        self.username = username
        self.global_name = global_name
        self.discriminator = discriminator
        self.avatar = avatar
        self.bot = bot

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> User:
        user = cls(id=str(data["id"]))
        user.update(data)
        return user

    def update(self, data: dict[str, Any]) -> None:
        """Merge newer user data into this user."""
        for key in ("username", "global_name", "discriminator", "avatar"):
            if key in data:
                setattr(self, key, data[key])
        if "bot" in data:
            self.bot = bool(data["bot"])

    @property
    def display_name(self) -> str:
        return self.global_name or self.username or self.id

    def __repr__(self) -> str:
        return f"<User id={self.id!r} username={self.username!r}>"


class Member(Protocol):
    """Read interface shared by cached and detached guild members."""

    @property
    def user_id(self) -> str: ...

    @property
    def nick(self) -> str | None: ...

    @property
    def roles(self) -> tuple[str, ...]: ...

    @property
    def joined_at(self) -> datetime | None: ...

    @property
    def permissions(self) -> str | None: ...

    @property
    def display_name(self) -> str: ...

    @property
    def is_detached(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class DetachedMember:
    """Membership data for a guild that is not in the local cache."""

    user_id: str
    nick: str | None = None
    roles: tuple[str, ...] = ()
    joined_at: datetime | None = None
    permissions: str | None = None
    user: User | None = None

    @classmethod
    def from_data(cls, data: dict[str, Any], *, user: User | None = None) -> DetachedMember:
        raw_user = data.get("user")
        user_id = user.id if user is not None else str(raw_user["id"])
        return cls(
            user_id=user_id,
            nick=data.get("nick"),
            roles=tuple(str(role) for role in data.get("roles") or ()),
            joined_at=_parse_timestamp(data.get("joined_at")),
            permissions=data.get("permissions"),
            user=user,
        )

    @property
    def display_name(self) -> str:
        if self.nick:
            return self.nick
        if self.user is not None:
            return self.user.display_name
        return self.user_id

    @property
    def is_detached(self) -> bool:
        return True


class ResolvedMember:
    """Guild member owned by a guild's membership cache.

    Instances are live references: a later upsert for the same user updates
    this object rather than replacing it.
    """

    __slots__ = ("_guild_id", "_user", "_nick", "_roles", "_joined_at", "_permissions")

    def __init__(self, guild_id: str, user: User, data: dict[str, Any]) -> None:
        self._guild_id = guild_id
        self._user = user
        self._nick: str | None = None
        self._roles: tuple[str, ...] = ()
        self._joined_at: datetime | None = None
        self._permissions: str | None = None
        self.update(data, user=user)

    def update(self, data: dict[str, Any], *, user: User | None = None) -> None:
        """Merge newer membership data into this member."""
        if user is not None:
            self._user = user
        if "nick" in data:
            self._nick = data["nick"]
        if "roles" in data:
            self._roles = tuple(str(role) for role in data["roles"] or ())
        if "joined_at" in data:
            self._joined_at = _parse_timestamp(data["joined_at"])
        if "permissions" in data:
            self._permissions = data["permissions"]

    @property
    def guild_id(self) -> str:
        return self._guild_id

    @property
    def user(self) -> User:
        return self._user

    @property
    def user_id(self) -> str:
        return self._user.id

    @property
    def nick(self) -> str | None:
        return self._nick

    @property
    def roles(self) -> tuple[str, ...]:
        return self._roles

    @property
    def joined_at(self) -> datetime | None:
        return self._joined_at

    @property
    def permissions(self) -> str | None:
        return self._permissions

    @property
    def display_name(self) -> str:
        return self._nick or self._user.display_name

    @property
    def is_detached(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<ResolvedMember guild_id={self._guild_id!r} user_id={self.user_id!r}>"


class Guild:
    """Cached guild with its membership cache."""

    def __init__(
        self,
        guild_id: str,
        *,
        name: str | None = None,
        lock: threading.RLock | None = None,
    ) -> None:
        self.id = guild_id
        self.name = name
        self._lock = lock or threading.RLock()
        self._members: dict[str, ResolvedMember] = {}

    @property
    def members(self) -> tuple[ResolvedMember, ...]:
        return tuple(self._members.values())

    def get_member(self, user_id: str) -> ResolvedMember | None:
        return self._members.get(user_id)

    def upsert_member(self, data: dict[str, Any], *, user: User | None = None) -> ResolvedMember:
        """Insert or update a member.

        ``user`` is the cached user the member belongs to; without it one is
        built from ``data["user"]``.
        """
        if user is None:
            user = User.from_data(data["user"])
        with self._lock:
            member = self._members.get(user.id)
            if member is None:
                member = ResolvedMember(self.id, user, data)
                self._members[user.id] = member
            else:
                member.update(data, user=user)
            return member

    def remove_member(self, user_id: str) -> ResolvedMember | None:
        with self._lock:
            return self._members.pop(user_id, None)

    def __repr__(self) -> str:
        return f"<Guild id={self.id!r} name={self.name!r} members={len(self._members)}>"


@dataclass(frozen=True, slots=True)
class Channel:
    """Cached channel the interaction may have been sent in."""

    id: str
    name: str | None = None
    guild_id: str | None = None
    type: int | None = None
