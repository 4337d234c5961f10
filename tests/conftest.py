from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from interaction_record import MemoryCache

PayloadFactory = Callable[..., dict[str, Any]]

# 2016-04-30 11:18:25.796 UTC
INTERACTION_ID = "175928847299117063"


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def make_payload() -> PayloadFactory:
    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": INTERACTION_ID,
            "type": 2,
            "application_id": "app-1",
            "token": "interaction-token",
            "version": 1,
            "channel_id": "chan-1",
            "guild_id": "guild-1",
            "member": {
                "user": {"id": "user-1", "username": "ada"},
                "nick": "Ada",
                "roles": ["role-1"],
                "joined_at": "2021-01-01T00:00:00+00:00",
                "permissions": "2048",
            },
            "data": {"id": "cmd-1", "name": "status", "type": 1},
            "locale": "en-US",
            "guild_locale": "en-GB",
        }
        for key, value in overrides.items():
            if value is None:
                payload.pop(key, None)
            else:
                payload[key] = value
        return payload

    return _make
