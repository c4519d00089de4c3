"""Unit tests for the toast notification queue

Tests cover:
- FIFO order with a single visible notification
- Manual dismissal and timeout expiry
- Undo actions
- The async display loop
"""

from __future__ import annotations

import asyncio
import contextlib

import pytest

from jobtrail.notifications.queue import NotificationKind, NotificationQueue


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def queue(clock):
    return NotificationQueue(clock=clock, default_timeout=5.0)


def test_first_push_is_visible_immediately(queue, clock):
    notification = queue.push("Saved")
    assert queue.current is notification
    assert notification.shown_at == clock.now
    assert queue.pending == 0


def test_notifications_show_one_at_a_time_in_order(queue):
    queue.push("one")
    queue.push("two")
    queue.push("three")

    assert queue.current.message == "one"
    assert queue.pending == 2
    assert queue.dismiss().message == "one"
    assert queue.current.message == "two"
    queue.dismiss()
    assert queue.current.message == "three"
    queue.dismiss()
    assert queue.current is None
    assert queue.dismiss() is None


def test_expire_respects_timeout(queue, clock):
    queue.push("one")
    queue.push("two", timeout=1.0)

    clock.now += 4
    assert queue.expire() is None
    clock.now += 1
    assert queue.expire().message == "one"

    # "two" became visible at the time "one" expired
    assert queue.current.shown_at == clock.now
    assert queue.expire(clock.now + 0.5) is None
    assert queue.expire(clock.now + 1.0).message == "two"


def test_undo_runs_action_and_dismisses(queue):
    calls = []
    queue.push("Deleted", undo=lambda: calls.append("undo"))
    queue.push("next")

    assert queue.undo() is True
    assert calls == ["undo"]
    assert queue.current.message == "next"


def test_undo_without_action(queue):
    assert queue.undo() is False
    queue.push("Saved")
    assert queue.undo() is False
    assert queue.current.message == "Saved"


def test_failing_undo_still_dismisses(queue):
    def fail():
        raise RuntimeError("boom")

    queue.push("Deleted", undo=fail)
    with pytest.raises(RuntimeError):
        queue.undo()
    assert queue.current is None


def test_kinds(queue):
    assert queue.push("ok", kind="success").kind is NotificationKind.SUCCESS
    with pytest.raises(ValueError):
        queue.push("bad", kind="fatal")


def test_clear(queue):
    queue.push("one")
    queue.push("two")
    queue.clear()
    assert queue.current is None
    assert queue.pending == 0


def test_run_displays_each_notification_until_timeout():
    async def scenario() -> list[str | None]:
        queue = NotificationQueue(default_timeout=0.01)
        seen: list[str | None] = []
        done = asyncio.Event()

        def display(notification):
            seen.append(notification.message if notification else None)
            if notification is None:
                done.set()

        queue.push("one")
        queue.push("two")
        task = asyncio.create_task(queue.run(display))
        await asyncio.wait_for(done.wait(), timeout=2.0)
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        return seen

    assert asyncio.run(scenario()) == ["one", "two", None]


def test_run_wakes_up_on_push_and_dismiss():
    async def scenario() -> list[str | None]:
        queue = NotificationQueue(default_timeout=60.0)
        seen: list[str | None] = []
        changed = asyncio.Event()

        async def display(notification):
            seen.append(notification.message if notification else None)
            changed.set()

        task = asyncio.create_task(queue.run(display))
        await asyncio.sleep(0)

        queue.push("hello")
        await asyncio.wait_for(changed.wait(), timeout=2.0)
        changed.clear()
        queue.dismiss()
        await asyncio.wait_for(changed.wait(), timeout=2.0)

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        return seen

    assert asyncio.run(scenario()) == ["hello", None]


def test_push_during_slow_display_is_not_lost():
    async def scenario() -> list[str | None]:
        queue = NotificationQueue(default_timeout=60.0)
        seen: list[str | None] = []
        displaying = asyncio.Event()
        shown_second = asyncio.Event()

        async def display(notification):
            seen.append(notification.message if notification else None)
            displaying.set()
            await asyncio.sleep(0.05)
            if notification is not None and notification.message == "second":
                shown_second.set()

        queue.push("first")
        task = asyncio.create_task(queue.run(display))
        await asyncio.wait_for(displaying.wait(), timeout=2.0)
        await asyncio.sleep(0.1)

        displaying.clear()
        queue.dismiss()
        await asyncio.wait_for(displaying.wait(), timeout=2.0)
        # display(None) is still sleeping when the next toast arrives
        queue.push("second")
        await asyncio.wait_for(shown_second.wait(), timeout=2.0)

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        return seen

    assert asyncio.run(scenario()) == ["first", None, "second"]
