"""
Carrying out committed ban-policy decisions.
"""

from __future__ import annotations

import logging

from banwarden.client.chat_client import ChatClient, ModerationLogger, RedactionSink
from banwarden.datatypes.action_datatypes import ActionDecision, ActionType
from banwarden.datatypes.reconcile_config import ReconcileConfig

BAN_TAG = "ApplyBan"
UNBAN_TAG = "ApplyUnBan"


class ActionExecutor:
    """
    Performs ban/unban calls for decisions made by the engine.

    In no-op mode nothing is sent to the homeserver; the would-be action is
    logged with a warning instead so operators can preview a pass. Failures
    of the ban/unban call propagate to the caller.

    Args:
        client: Chat-service client used for ban/unban calls.
        config: Pass configuration (no-op flag, redaction patterns).
        log: Operator-facing logger.
        redaction: Sink for follow-up redaction jobs; None disables them.
    """

    def __init__(
        self,
        client: ChatClient,
        config: ReconcileConfig,
        log: ModerationLogger,
        redaction: RedactionSink | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._log = log
        self._redaction = redaction

    async def execute(self, decision: ActionDecision) -> None:
        if decision.action is ActionType.BAN:
            await self._ban(decision)
        elif decision.action is ActionType.UNBAN:
            await self._unban(decision)

    async def _ban(self, decision: ActionDecision) -> None:
        user_id, room_id, reason = decision.user_id, decision.room_id, decision.reason
        await self._log.log(logging.INFO, BAN_TAG, f"Banning {user_id} in {room_id} for: {reason}", room_id)

        if self._config.noop:
            await self._log.log(
                logging.WARNING,
                BAN_TAG,
                f"Tried to ban {user_id} in {room_id} but running in no-op mode",
                room_id,
            )
            return

        await self._client.ban_user(user_id, room_id, reason)
        if self._redaction is not None and self._config.should_redact_for(reason):
            self._redaction.enqueue_redaction(user_id, room_id)

    async def _unban(self, decision: ActionDecision) -> None:
        user_id, room_id = decision.user_id, decision.room_id
        await self._log.log(logging.INFO, UNBAN_TAG, f"Unbanning {user_id} in {room_id} for: {decision.reason}", room_id)

        if self._config.noop:
            await self._log.log(
                logging.WARNING,
                UNBAN_TAG,
                f"Tried to unban {user_id} in {room_id} but running in no-op mode",
                room_id,
            )
            return

        await self._client.unban_user(user_id, room_id)
