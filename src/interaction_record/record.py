"""Interaction records built from raw Discord interaction payloads."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, Any, TypeVar

import msgspec
from takopi.logging import get_logger

from .errors import InvalidPermissionData, MalformedPayload
from .permissions import PermissionSnapshot, parse_permissions
from .settings import DEFAULT_SETTINGS, InteractionSettings
from .snowflake import is_snowflake, snowflake_time, snowflake_timestamp
from .types import (
    ApplicationCommandType,
    ComponentType,
    DetachedMember,
    InteractionType,
)

if TYPE_CHECKING:
    from .cache import CacheContext, GuildLike
    from .types import Channel, Member, User

logger = get_logger(__name__)

__all__ = ["InteractionRecord", "REQUIRED_FIELDS"]

REQUIRED_FIELDS = ("id", "type", "application_id", "token", "version")

_E = TypeVar("_E", bound=IntEnum)

Snowflake = str | int


class _RawUser(msgspec.Struct):
    id: Snowflake


class _RawMember(msgspec.Struct):
    user: _RawUser | None = None
    nick: str | None = None
    roles: list[Snowflake] = []
    joined_at: str | None = None
    permissions: Any = None


class _RawInteraction(msgspec.Struct):
    id: Snowflake
    type: int
    application_id: Snowflake
    token: str
    version: int
    channel_id: Snowflake | None = None
    guild_id: Snowflake | None = None
    user: _RawUser | None = None
    member: _RawMember | None = None
    data: dict[str, Any] | None = None
    locale: str | None = None
    guild_locale: str | None = None


def _as_id(value: object) -> str | None:
    if value is None:
        return None
    token = str(value).strip()
    return token or None


def _malformed(reason: str, *, field: str | None = None) -> MalformedPayload:
    logger.warning("interaction.malformed", reason=reason, field=field)
    return MalformedPayload(reason, field=field)


def _coerce_discriminant(enum: type[_E], value: object, *, field: str) -> _E | None:
    if value is None:
        return None
    try:
        return enum(value)
    except ValueError:
        logger.debug("interaction.unknown_discriminant", field=field, value=value)
        return None


def _validate(payload: object) -> _RawInteraction:
    if not isinstance(payload, Mapping):
        raise _malformed(f"payload must be a mapping, got {type(payload).__name__}")
    for name in REQUIRED_FIELDS:
        if payload.get(name) is None:
            raise _malformed(f"missing required field {name!r}", field=name)
    try:
        raw = msgspec.convert(dict(payload), type=_RawInteraction)
    except msgspec.ValidationError as exc:
        raise _malformed(str(exc)) from exc
    if raw.user is None and (raw.member is None or raw.member.user is None):
        raise _malformed("payload carries neither 'user' nor 'member.user'", field="user")
    return raw


class InteractionRecord:
    """A single interaction received from Discord.

    The record is immutable once built. ``user`` and ``member`` are borrowed
    from the cache context; ``channel`` and ``guild`` are looked up on every
    access and are ``None`` when the cache does not hold them.

    The response token is readable as ``record.token`` but is left out of
    ``repr()``, ``fields()`` and ``as_dict()``.
    """

    FIELDS = (
        "id",
        "type",
        "application_id",
        "channel_id",
        "guild_id",
        "user",
        "member",
        "version",
        "member_permissions",
        "locale",
        "guild_locale",
        "target_id",
        "target_type",
        "component_type",
        "command_id",
        "command_name",
        "custom_id",
    )

    __slots__ = FIELDS + ("_token", "_cache")

    id: str
    type: InteractionType
    application_id: str
    channel_id: str | None
    guild_id: str | None
    user: User
    member: Member | None
    version: int
    member_permissions: PermissionSnapshot | None
    locale: str | None
    guild_locale: str | None
    target_id: str | None
    target_type: ApplicationCommandType | None
    component_type: ComponentType | None
    command_id: str | None
    command_name: str | None
    custom_id: str | None

    def __init__(
        self,
        cache: CacheContext,
        payload: Mapping[str, Any],
        *,
        settings: InteractionSettings | None = None,
    ) -> None:
        if settings is None:
            settings = DEFAULT_SETTINGS
        raw = _validate(payload)

        try:
            interaction_type = InteractionType(raw.type)
        except ValueError:
            raise _malformed(f"unknown interaction type {raw.type!r}", field="type") from None
        if settings.strict_snowflake and not is_snowflake(raw.id):
            raise _malformed(f"interaction id {raw.id!r} is not a snowflake", field="id")

        member_permissions: PermissionSnapshot | None = None
        if raw.member is not None and raw.member.permissions is not None:
            try:
                member_permissions = parse_permissions(raw.member.permissions)
            except InvalidPermissionData:
                logger.warning("interaction.permissions_invalid", interaction_id=str(raw.id))
                raise

        data = raw.data or {}
        set_ = object.__setattr__
        set_(self, "_cache", cache)
        set_(self, "_token", raw.token)
        set_(self, "id", str(raw.id))
        set_(self, "type", interaction_type)
        set_(self, "application_id", str(raw.application_id))
        set_(self, "channel_id", _as_id(raw.channel_id))
        set_(self, "guild_id", _as_id(raw.guild_id))
        set_(self, "version", raw.version)
        set_(self, "member_permissions", member_permissions)
        set_(self, "locale", raw.locale)
        set_(self, "guild_locale", raw.guild_locale)

        is_command_kind = interaction_type in (
            InteractionType.APPLICATION_COMMAND,
            InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE,
        )
        set_(self, "target_id", _as_id(data.get("target_id")))
        set_(
            self,
            "target_type",
            _coerce_discriminant(ApplicationCommandType, data.get("type"), field="data.type")
            if is_command_kind
            else None,
        )
        set_(
            self,
            "component_type",
            _coerce_discriminant(
                ComponentType, data.get("component_type"), field="data.component_type"
            )
            if interaction_type == InteractionType.MESSAGE_COMPONENT
            else None,
        )
        set_(self, "command_id", _as_id(data.get("id")) if is_command_kind else None)
        set_(self, "command_name", data.get("name") if is_command_kind else None)
        set_(
            self,
            "custom_id",
            _as_id(data.get("custom_id"))
            if interaction_type
            in (InteractionType.MESSAGE_COMPONENT, InteractionType.MODAL_SUBMIT)
            else None,
        )

        raw_member = payload.get("member")
        user_data = payload.get("user") or raw_member["user"]
        user = cache.upsert_user(user_data)
        set_(self, "user", user)
        set_(self, "member", self._resolve_member(raw_member, user_data, user))

        logger.debug(
            "interaction.created",
            interaction_id=self.id,
            type=interaction_type.name,
            guild_id=self.guild_id,
        )

    @classmethod
    def from_payload(
        cls,
        cache: CacheContext,
        payload: Mapping[str, Any],
        *,
        settings: InteractionSettings | None = None,
    ) -> InteractionRecord:
        return cls(cache, payload, settings=settings)

    def _resolve_member(
        self,
        raw_member: Mapping[str, Any] | None,
        user_data: Mapping[str, Any],
        user: User,
    ) -> Member | None:
        if raw_member is None:
            return None
        member_data = dict(raw_member)
        member_data.setdefault("user", user_data)
        guild = self.guild
        if guild is not None:
            return guild.upsert_member(member_data, user=user)
        logger.debug("interaction.member_detached", guild_id=self.guild_id, user_id=user.id)
        return DetachedMember.from_data(member_data, user=user)

    @property
    def token(self) -> str:
        return self._token

    @property
    def created_timestamp(self) -> int:
        """Milliseconds since the Unix epoch at which the interaction was created."""
        return snowflake_timestamp(self.id)

    @property
    def created_at(self) -> datetime:
        return snowflake_time(self.id)

    @property
    def channel(self) -> Channel | None:
        if self.channel_id is None:
            return None
        return self._cache.get_channel(self.channel_id)

    @property
    def guild(self) -> GuildLike | None:
        if self.guild_id is None:
            return None
        return self._cache.get_guild(self.guild_id)

    def fields(self) -> tuple[str, ...]:
        return self.FIELDS

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}

    # Context membership

    def in_guild(self) -> bool:
        """Sent from a guild and carries membership data."""
        return self.guild_id is not None and self.member is not None

    def in_cached_guild(self) -> bool:
        """Sent from a guild that is present in the local cache."""
        return self.member is not None and self.guild is not None

    def in_raw_guild(self) -> bool:
        """Sent from a guild that is not present in the local cache."""
        return self.guild_id is not None and self.member is not None and self.guild is None

    # Classification

    def is_command(self) -> bool:
        return self.type == InteractionType.APPLICATION_COMMAND

    def is_chat_input_command(self) -> bool:
        return self.type == InteractionType.APPLICATION_COMMAND and self.target_id is None

    def is_context_menu_command(self) -> bool:
        return self.type == InteractionType.APPLICATION_COMMAND and self.target_id is not None

    def is_user_context_menu_command(self) -> bool:
        return (
            self.is_context_menu_command() and self.target_type == ApplicationCommandType.USER
        )

    def is_message_context_menu_command(self) -> bool:
        return (
            self.is_context_menu_command()
            and self.target_type == ApplicationCommandType.MESSAGE
        )

    def is_autocomplete(self) -> bool:
        return self.type == InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE

    def is_message_component(self) -> bool:
        return self.type == InteractionType.MESSAGE_COMPONENT

    def is_button(self) -> bool:
        return self.is_message_component() and self.component_type == ComponentType.BUTTON

    def is_select_menu(self) -> bool:
        return self.is_message_component() and self.component_type == ComponentType.SELECT_MENU

    def is_modal_submit(self) -> bool:
        return self.type == InteractionType.MODAL_SUBMIT

    def is_ping(self) -> bool:
        return self.type == InteractionType.PING

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"InteractionRecord is read-only; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"InteractionRecord is read-only; cannot delete {name!r}")

    def __repr__(self) -> str:
        return (
            f"<InteractionRecord id={self.id!r} type={self.type.name} "
            f"guild_id={self.guild_id!r} channel_id={self.channel_id!r} "
            f"user_id={self.user.id!r}>"
        )
