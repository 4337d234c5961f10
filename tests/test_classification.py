from __future__ import annotations

from typing import Any

import pytest

from interaction_record import (
    ApplicationCommandType,
    ComponentType,
    InteractionRecord,
    MemoryCache,
)

from .conftest import PayloadFactory

PREDICATES = (
    "is_command",
    "is_chat_input_command",
    "is_context_menu_command",
    "is_user_context_menu_command",
    "is_message_context_menu_command",
    "is_autocomplete",
    "is_message_component",
    "is_button",
    "is_select_menu",
    "is_modal_submit",
    "is_ping",
)

FAMILIES = (
    "is_command",
    "is_autocomplete",
    "is_message_component",
    "is_modal_submit",
    "is_ping",
)

CASES: list[tuple[str, int, dict[str, Any] | None, set[str]]] = [
    (
        "chat_input",
        2,
        {"id": "cmd-1", "name": "status", "type": 1},
        {"is_command", "is_chat_input_command"},
    ),
    (
        "user_context_menu",
        2,
        {"id": "cmd-2", "name": "Profile", "type": 2, "target_id": "user-7"},
        {"is_command", "is_context_menu_command", "is_user_context_menu_command"},
    ),
    (
        "message_context_menu",
        2,
        {"id": "cmd-3", "name": "Quote", "type": 3, "target_id": "msg-7"},
        {"is_command", "is_context_menu_command", "is_message_context_menu_command"},
    ),
    (
        "autocomplete",
        4,
        {"id": "cmd-1", "name": "status", "type": 1},
        {"is_autocomplete"},
    ),
    (
        "button",
        3,
        {"custom_id": "cancel", "component_type": 2},
        {"is_message_component", "is_button"},
    ),
    (
        "select_menu",
        3,
        {"custom_id": "bind_select", "component_type": 3, "values": ["repo-1"]},
        {"is_message_component", "is_select_menu"},
    ),
    (
        "role_select",
        3,
        {"custom_id": "roles", "component_type": 6, "values": ["role-1"]},
        {"is_message_component"},
    ),
    (
        "modal_submit",
        5,
        {"custom_id": "feedback", "components": []},
        {"is_modal_submit"},
    ),
    ("ping", 1, None, {"is_ping"}),
]


@pytest.mark.parametrize(
    ("interaction_type", "data", "expected"),
    [case[1:] for case in CASES],
    ids=[case[0] for case in CASES],
)
def test_predicates_match_expected_classification(
    cache: MemoryCache,
    make_payload: PayloadFactory,
    interaction_type: int,
    data: dict[str, Any] | None,
    expected: set[str],
) -> None:
    record = InteractionRecord(cache, make_payload(type=interaction_type, data=data))
    matched = {name for name in PREDICATES if getattr(record, name)()}
    assert matched == expected
    assert sum(getattr(record, name)() for name in FAMILIES) == 1


def test_context_menu_target_fields(cache: MemoryCache, make_payload: PayloadFactory) -> None:
    record = InteractionRecord(
        cache,
        make_payload(data={"id": "cmd-2", "name": "Profile", "type": 2, "target_id": 42}),
    )
    assert record.target_id == "42"
    assert record.target_type is ApplicationCommandType.USER
    assert record.component_type is None
    assert record.custom_id is None


def test_component_fields(cache: MemoryCache, make_payload: PayloadFactory) -> None:
    record = InteractionRecord(
        cache, make_payload(type=3, data={"custom_id": "flow:run-1:resume", "component_type": 2})
    )
    assert record.component_type is ComponentType.BUTTON
    assert record.custom_id == "flow:run-1:resume"
    assert record.command_name is None
    assert record.target_type is None


def test_unknown_component_type_does_not_fail(
    cache: MemoryCache, make_payload: PayloadFactory
) -> None:
    record = InteractionRecord(
        cache, make_payload(type=3, data={"custom_id": "future", "component_type": 99})
    )
    assert record.component_type is None
    assert record.is_message_component() is True
    assert record.is_button() is False
    assert record.is_select_menu() is False


def test_unknown_command_type_with_target_is_context_menu_only(
    cache: MemoryCache, make_payload: PayloadFactory
) -> None:
    record = InteractionRecord(
        cache, make_payload(data={"id": "cmd-9", "name": "Future", "type": 9, "target_id": "x"})
    )
    assert record.target_type is None
    assert record.is_context_menu_command() is True
    assert record.is_user_context_menu_command() is False
    assert record.is_message_context_menu_command() is False


@pytest.mark.parametrize("guild_cached", [True, False])
def test_guild_context_predicates_are_consistent(
    cache: MemoryCache, make_payload: PayloadFactory, guild_cached: bool
) -> None:
    if guild_cached:
        cache.add_guild("guild-1")
    record = InteractionRecord(cache, make_payload())

    assert record.in_guild() is True
    assert record.in_cached_guild() is guild_cached
    assert record.in_raw_guild() is not guild_cached
    assert not (record.in_cached_guild() and record.in_raw_guild())
    assert record.in_guild() == (record.in_cached_guild() or record.in_raw_guild())
