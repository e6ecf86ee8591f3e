"""
Membership snapshot retrieval.

Two interchangeable strategies produce the same ``List[RoomMember]`` contract:

- ``JoinedMembersFetcher`` lists only joined users and labels every one of them
  ``join``. Cheap, but existing bans and non-joined unban candidates are
  invisible to it.
- ``RoomStateMembersFetcher`` reads the full room state and reports each
  ``m.room.member`` event's declared membership.

Snapshots are built fresh on every call and never cached, since membership may
change between passes.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Protocol

from banwarden.client.chat_client import ChatClient
from banwarden.datatypes.membership_datatypes import MEMBERSHIP_JOIN, MEMBERSHIP_LEAVE, RoomMember
from banwarden.datatypes.reconcile_config import ReconcileConfig

MEMBER_EVENT_TYPE = "m.room.member"


class MembershipFetcher(Protocol):
    async def fetch_members(self, room_id: str) -> List[RoomMember]:
        ...


class JoinedMembersFetcher:
    """Fast strategy: joined members only."""

    def __init__(self, client: ChatClient) -> None:
        self._client = client

    async def fetch_members(self, room_id: str) -> List[RoomMember]:
        user_ids = await self._client.get_joined_room_members(room_id)
        return [RoomMember(user_id=user_id, membership=MEMBERSHIP_JOIN) for user_id in user_ids]


class RoomStateMembersFetcher:
    """Full strategy: every membership state event in the room."""

    def __init__(self, client: ChatClient) -> None:
        self._client = client

    async def fetch_members(self, room_id: str) -> List[RoomMember]:
        state = await self._client.get_room_state(room_id)
        return members_from_state(state)


def members_from_state(state: Iterable[Dict[str, Any]]) -> List[RoomMember]:
    """
    Convert raw room state events into membership entries.

    Only ``m.room.member`` events with a non-empty ``state_key`` (the target
    user id) are kept. Events without content or without a ``membership``
    field count as ``leave``.
    """
    members: List[RoomMember] = []
    for event in state:
        if event.get("type") != MEMBER_EVENT_TYPE or not event.get("state_key"):
            continue
        content = event.get("content")
        membership = content.get("membership") if isinstance(content, dict) else None
        members.append(RoomMember(user_id=event["state_key"], membership=membership or MEMBERSHIP_LEAVE))
    return members


def create_membership_fetcher(client: ChatClient, config: ReconcileConfig) -> MembershipFetcher:
    """Pick the retrieval strategy selected by ``config.faster_membership_checks``."""
    if config.faster_membership_checks:
        return JoinedMembersFetcher(client)
    return RoomStateMembersFetcher(client)
