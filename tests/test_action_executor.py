import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from banwarden.datatypes.action_datatypes import ActionDecision, ActionType
from banwarden.datatypes.reconcile_config import ReconcileConfig
from banwarden.moderation.action_executor import BAN_TAG, UNBAN_TAG, ActionExecutor


def _ban(reason: str = "spam") -> ActionDecision:
    return ActionDecision("@spam:a.org", "!r1", ActionType.BAN, reason)


@pytest.mark.asyncio
async def test_ban_calls_client_with_reason(chat_client, recording_log) -> None:
    executor = ActionExecutor(chat_client, ReconcileConfig(automatic_redact_patterns=()), recording_log)

    await executor.execute(_ban("Flooding"))

    assert chat_client.bans == [("@spam:a.org", "!r1", "Flooding")]
    assert recording_log.entries[0][:2] == (logging.INFO, BAN_TAG)


@pytest.mark.asyncio
async def test_ban_with_matching_reason_queues_redaction(chat_client, recording_log, redactions) -> None:
    executor = ActionExecutor(chat_client, ReconcileConfig(), recording_log, redactions)

    await executor.execute(_ban("SPAM"))

    assert redactions.jobs == [("@spam:a.org", "!r1")]


@pytest.mark.asyncio
async def test_ban_with_glob_redaction_pattern(chat_client, recording_log, redactions) -> None:
    config = ReconcileConfig(automatic_redact_patterns=("Crypto *",))
    executor = ActionExecutor(chat_client, config, recording_log, redactions)

    await executor.execute(_ban("crypto scam links"))
    await executor.execute(ActionDecision("@other:a.org", "!r1", ActionType.BAN, "harassment"))

    assert redactions.jobs == [("@spam:a.org", "!r1")]


@pytest.mark.asyncio
async def test_ban_without_redaction_sink_still_bans(chat_client, recording_log) -> None:
    executor = ActionExecutor(chat_client, ReconcileConfig(), recording_log, None)

    await executor.execute(_ban("spam"))

    assert len(chat_client.bans) == 1


@pytest.mark.asyncio
async def test_failed_ban_does_not_queue_redaction(recording_log, redactions) -> None:
    client = MagicMock()
    client.ban_user = AsyncMock(side_effect=RuntimeError("nope"))
    executor = ActionExecutor(client, ReconcileConfig(), recording_log, redactions)

    with pytest.raises(RuntimeError):
        await executor.execute(_ban("spam"))

    assert redactions.jobs == []


@pytest.mark.asyncio
async def test_unban_never_redacts(chat_client, recording_log, redactions) -> None:
    executor = ActionExecutor(chat_client, ReconcileConfig(), recording_log, redactions)

    await executor.execute(ActionDecision("@friend:a.org", "!r1", ActionType.UNBAN, "spam appeal"))

    assert chat_client.unbans == [("@friend:a.org", "!r1")]
    assert redactions.jobs == []
    assert recording_log.entries[0] == (logging.INFO, UNBAN_TAG, "Unbanning @friend:a.org in !r1 for: spam appeal", "!r1")


@pytest.mark.asyncio
async def test_noop_ban_only_logs(recording_log, redactions) -> None:
    client = MagicMock()
    client.ban_user = AsyncMock()
    executor = ActionExecutor(client, ReconcileConfig(noop=True), recording_log, redactions)

    await executor.execute(_ban("spam"))

    client.ban_user.assert_not_awaited()
    assert redactions.jobs == []
    assert [lvl for lvl, *_ in recording_log.entries] == [logging.INFO, logging.WARNING]


@pytest.mark.asyncio
async def test_null_decision_does_nothing(recording_log) -> None:
    client = MagicMock()
    client.ban_user = AsyncMock()
    client.unban_user = AsyncMock()
    executor = ActionExecutor(client, ReconcileConfig(), recording_log)

    await executor.execute(ActionDecision.none("@alice:a.org", "!r1"))

    client.ban_user.assert_not_awaited()
    client.unban_user.assert_not_awaited()
    assert recording_log.entries == []
