"""Errors raised while building interaction records."""

from __future__ import annotations


class InteractionError(Exception):
    """Base interaction record error."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class MalformedPayload(InteractionError):
    """Raw payload is missing a required field or carries a wrongly typed one."""


class InvalidPermissionData(InteractionError):
    """Member permission bitset is present but cannot be parsed."""

    def __init__(self, message: str, *, raw: object = None) -> None:
        super().__init__(message, field="member.permissions")
        self.raw = raw
