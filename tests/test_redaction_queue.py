import asyncio
from unittest.mock import AsyncMock

import pytest

from banwarden.scheduler.redaction_queue import RedactionQueue


@pytest.mark.asyncio
async def test_enqueue_runs_handler_in_background() -> None:
    handler = AsyncMock()
    queue = RedactionQueue(handler)

    queue.enqueue_redaction("@spam:a.org", "!r1")
    await asyncio.wait_for(queue.drain(), timeout=1)

    handler.assert_awaited_once_with("@spam:a.org", "!r1")
    assert queue.pending_keys == set()
    await queue.shutdown()


@pytest.mark.asyncio
async def test_duplicate_pending_jobs_are_coalesced() -> None:
    started = asyncio.Event()
    release = asyncio.Event()
    calls = []

    async def handler(user_id: str, room_id: str) -> None:
        calls.append((user_id, room_id))
        started.set()
        await release.wait()

    queue = RedactionQueue(handler)
    queue.enqueue_redaction("@spam:a.org", "!r1")
    queue.enqueue_redaction("@spam:a.org", "!r1")
    queue.enqueue_redaction("@spam:a.org", "!r2")
    await asyncio.wait_for(started.wait(), timeout=1)
    release.set()
    await asyncio.wait_for(queue.drain(), timeout=1)

    assert calls == [("@spam:a.org", "!r1"), ("@spam:a.org", "!r2")]
    await queue.shutdown()


@pytest.mark.asyncio
async def test_full_queue_drops_without_raising() -> None:
    handler = AsyncMock()
    queue = RedactionQueue(handler, max_size=1)

    queue.enqueue_redaction("@a:x", "!r1")
    queue.enqueue_redaction("@b:x", "!r1")

    assert queue.queue.qsize() == 1
    assert ("@b:x", "!r1") not in queue.pending_keys
    await asyncio.wait_for(queue.drain(), timeout=1)
    handler.assert_awaited_once_with("@a:x", "!r1")
    await queue.shutdown()


@pytest.mark.asyncio
async def test_handler_failure_does_not_stop_worker() -> None:
    handler = AsyncMock(side_effect=[RuntimeError("rate limited"), None])
    queue = RedactionQueue(handler)

    queue.enqueue_redaction("@a:x", "!r1")
    queue.enqueue_redaction("@b:x", "!r1")
    await asyncio.wait_for(queue.drain(), timeout=1)

    assert handler.await_count == 2
    assert queue.runner_task is not None and not queue.runner_task.done()
    await queue.shutdown()


def test_enqueue_without_running_loop_does_not_raise() -> None:
    queue = RedactionQueue(AsyncMock())

    queue.enqueue_redaction("@a:x", "!r1")

    assert queue.queue.qsize() == 1
    assert queue.runner_task is None


@pytest.mark.asyncio
async def test_shutdown_is_idempotent_and_clears_jobs() -> None:
    queue = RedactionQueue(AsyncMock())
    queue.start()
    await queue.shutdown()
    queue.queue.put_nowait(("@a:x", "!r1"))

    await queue.shutdown()

    assert queue.queue.empty()
    assert queue.runner_task is None
