"""
Pytest configuration and fixtures for banwarden tests.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


class FakeChatClient:
    """In-memory homeserver: room state, plus a record of every call made."""

    def __init__(self) -> None:
        self.rooms: Dict[str, Dict[str, str]] = {}
        self.fetch_errors: Dict[str, Exception] = {}
        self.ban_errors: Dict[str, Exception] = {}
        self.bans: List[tuple[str, str, str]] = []
        self.unbans: List[tuple[str, str]] = []
        self.notices: List[tuple[str, str]] = []

    def set_members(self, room_id: str, members: Dict[str, str]) -> None:
        self.rooms[room_id] = dict(members)

    async def get_joined_room_members(self, room_id: str) -> List[str]:
        if room_id in self.fetch_errors:
            raise self.fetch_errors[room_id]
        return [user for user, membership in self.rooms.get(room_id, {}).items() if membership == "join"]

    async def get_room_state(self, room_id: str) -> List[Dict[str, Any]]:
        if room_id in self.fetch_errors:
            raise self.fetch_errors[room_id]
        events: List[Dict[str, Any]] = [{"type": "m.room.create", "state_key": "", "content": {}}]
        for user, membership in self.rooms.get(room_id, {}).items():
            events.append({"type": "m.room.member", "state_key": user, "content": {"membership": membership}})
        return events

    async def ban_user(self, user_id: str, room_id: str, reason: str) -> None:
        if room_id in self.ban_errors:
            raise self.ban_errors[room_id]
        self.bans.append((user_id, room_id, reason))
        self.rooms.setdefault(room_id, {})[user_id] = "ban"

    async def unban_user(self, user_id: str, room_id: str) -> None:
        if room_id in self.ban_errors:
            raise self.ban_errors[room_id]
        self.unbans.append((user_id, room_id))
        self.rooms.setdefault(room_id, {})[user_id] = "leave"

    async def send_notice(self, room_id: str, text: str) -> None:
        self.notices.append((room_id, text))


class RecordingLog:
    """ModerationLogger that keeps every message in memory."""

    def __init__(self) -> None:
        self.entries: List[tuple[int, str, str, str | None]] = []

    async def log(self, level: int, tag: str, message: str, room_id: str | None = None) -> None:
        self.entries.append((level, tag, message, room_id))

    def messages(self, level: int | None = None) -> List[str]:
        return [m for lvl, _, m, _ in self.entries if level is None or lvl == level]


class RecordingRedactions:
    def __init__(self) -> None:
        self.jobs: List[tuple[str, str]] = []

    def enqueue_redaction(self, user_id: str, room_id: str) -> None:
        self.jobs.append((user_id, room_id))


@pytest.fixture()
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture()
def recording_log() -> RecordingLog:
    return RecordingLog()


@pytest.fixture()
def redactions() -> RecordingRedactions:
    return RecordingRedactions()
