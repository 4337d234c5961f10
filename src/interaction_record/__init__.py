"""Discord interaction records and their classification."""

from .cache import CacheContext, MemoryCache
from .errors import InteractionError, InvalidPermissionData, MalformedPayload
from .permissions import PermissionSnapshot, parse_permissions
from .record import InteractionRecord
from .settings import InteractionSettings
from .types import (
    ApplicationCommandType,
    Channel,
    ComponentType,
    DetachedMember,
    Guild,
    InteractionType,
    Member,
    ResolvedMember,
    User,
)

__all__ = [
    "ApplicationCommandType",
    "CacheContext",
    "Channel",
    "ComponentType",
    "DetachedMember",
    "Guild",
    "InteractionError",
    "InteractionRecord",
    "InteractionSettings",
    "InteractionType",
    "InvalidPermissionData",
    "MalformedPayload",
    "Member",
    "MemoryCache",
    "PermissionSnapshot",
    "ResolvedMember",
    "User",
    "parse_permissions",
]
