"""
Ban-policy reconciliation.

Applies the user rules of a set of ban lists to the membership of a set of
rooms. For each member, lists are consulted in order and rules within a list
in order; the first applicable rule decides. A ban rule does not apply to a
user who is already banned, and an unban rule only applies to a user who is
currently banned, so running the same pass twice is a no-op the second time.

Rooms are processed one after another. Anything that goes wrong inside a
room (membership fetch, ban/unban call) stops that room only and becomes a
single ``RoomUpdateError`` in the returned report.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Sequence

from banwarden.banlist.ban_list import BanList
from banwarden.client.chat_client import ChatClient, ModerationLogger, RedactionSink
from banwarden.datatypes.action_datatypes import ActionDecision, ActionType
from banwarden.datatypes.error_datatypes import RoomUpdateError
from banwarden.datatypes.membership_datatypes import RoomMember
from banwarden.datatypes.reconcile_config import ReconcileConfig
from banwarden.membership.membership_fetcher import MembershipFetcher, create_membership_fetcher
from banwarden.moderation.action_executor import ActionExecutor
from banwarden.moderation.error_classifier import ErrorCollector
from banwarden.moderation.management_log import ManagementLog
from banwarden.util.logger import get_logger

logger = get_logger("ban_policy_engine")

ENGINE_TAG = "ApplyBan"


def find_decision(lists: Sequence[BanList], member: RoomMember, room_id: str) -> ActionDecision:
    """
    Return the decision of the first applicable rule for ``member``.

    Ban-match is checked before unban-match for every rule. Matches that would
    be redundant (banning a banned user, unbanning one who is not banned) are
    skipped and the scan continues.
    """
    for ban_list in lists:
        for rule in ban_list.user_rules:
            if rule.is_banned_match(member.user_id):
                if member.is_banned:
                    continue
                return ActionDecision(member.user_id, room_id, ActionType.BAN, rule.reason)
            if rule.is_unbanned_match(member.user_id):
                if not member.is_banned:
                    continue
                return ActionDecision(member.user_id, room_id, ActionType.UNBAN, rule.reason)
    return ActionDecision.none(member.user_id, room_id)


class BanPolicyEngine:
    """
    Drives a reconciliation pass over rooms.

    Args:
        client: Chat-service client for membership reads and ban/unban calls.
        config: Pass configuration.
        log: Operator-facing logger; defaults to a local-only ManagementLog.
        redaction: Sink for follow-up redaction jobs.
        fetcher: Membership strategy; defaults to the one ``config`` selects.
    """

    def __init__(
        self,
        client: ChatClient,
        config: ReconcileConfig,
        log: ModerationLogger | None = None,
        redaction: RedactionSink | None = None,
        fetcher: MembershipFetcher | None = None,
    ) -> None:
        self._log = log or ManagementLog()
        self._fetcher = fetcher or create_membership_fetcher(client, config)
        self._executor = ActionExecutor(client, config, self._log, redaction)

    async def apply_ban_policies(self, lists: Sequence[BanList], room_ids: Sequence[str]) -> List[RoomUpdateError]:
        """
        Bring every room in ``room_ids`` into compliance with ``lists``.

        Returns:
            One ``RoomUpdateError`` per room that could not be fully processed,
            in room order. Rooms that succeeded do not appear.
        """
        errors = ErrorCollector()
        for room_id in room_ids:
            try:
                await self.reconcile_room(lists, room_id)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                error = errors.record(room_id, exc)
                if error is not None:
                    logger.warning(
                        "[BAN POLICY] Failed to update member bans in %s (%s): %s",
                        room_id,
                        error.error_kind,
                        error.error_message,
                    )

        logger.debug("[BAN POLICY] Pass over %d rooms finished with %d errors", len(room_ids), len(errors))
        return errors.errors

    async def reconcile_room(self, lists: Sequence[BanList], room_id: str) -> List[ActionDecision]:
        """
        Reconcile a single room; exceptions propagate to the caller.

        Returns:
            The decisions that were executed, in member order.
        """
        await self._log.log(logging.DEBUG, ENGINE_TAG, f"Updating member bans in {room_id}", room_id)

        members = await self._fetcher.fetch_members(room_id)
        applied: List[ActionDecision] = []
        for member in members:
            decision = find_decision(lists, member, room_id)
            if not decision.is_actionable:
                continue
            await self._executor.execute(decision)
            applied.append(decision)
        return applied


async def apply_ban_policies(
    lists: Sequence[BanList],
    room_ids: Sequence[str],
    *,
    client: ChatClient,
    config: ReconcileConfig,
    log: ModerationLogger | None = None,
    redaction: RedactionSink | None = None,
) -> List[RoomUpdateError]:
    """Run one reconciliation pass; see :meth:`BanPolicyEngine.apply_ban_policies`."""
    engine = BanPolicyEngine(client, config, log=log, redaction=redaction)
    return await engine.apply_ban_policies(lists, room_ids)
