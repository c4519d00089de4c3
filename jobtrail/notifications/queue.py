"""
FIFO toast notifications with at most one visible at a time.

The queue is an explicit object handed to whoever needs to post
messages; there is no module-level queue. A consumer either drives it
synchronously (``dismiss`` / ``expire``) or runs the ``run`` coroutine,
which shows each notification until it is dismissed or times out.
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
import time
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from jobtrail.config import NOTIFICATION_TIMEOUT_SECONDS
from jobtrail.observability.logging import get_logger

logger = get_logger(__name__)

_ids = itertools.count(1)


class NotificationKind(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notification:
    """A queued or visible toast message."""

    message: str
    kind: NotificationKind = NotificationKind.INFO
    timeout: float = NOTIFICATION_TIMEOUT_SECONDS
    undo: Callable[[], Any] | None = None
    id: int = field(default_factory=lambda: next(_ids))
    shown_at: float | None = None

    def remaining(self, now: float) -> float:
        if self.shown_at is None:
            return self.timeout
        return self.timeout - (now - self.shown_at)


DisplayCallback = Callable[[Notification | None], Awaitable[Any] | Any]


class NotificationQueue:
    """
    FIFO notification queue; the head of the queue is the visible one.

    Args:
        clock: Monotonic time source, injectable for tests
        default_timeout: Seconds a notification stays visible
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        default_timeout: float = NOTIFICATION_TIMEOUT_SECONDS,
    ):
        self._clock = clock
        self._default_timeout = default_timeout
        self._pending: deque[Notification] = deque()
        self._current: Notification | None = None
        self._changed = asyncio.Event()

    @property
    def current(self) -> Notification | None:
        return self._current

    @property
    def pending(self) -> int:
        """Number of notifications waiting behind the visible one."""
        return len(self._pending)

    def push(
        self,
        message: str,
        kind: NotificationKind | str = NotificationKind.INFO,
        undo: Callable[[], Any] | None = None,
        timeout: float | None = None,
    ) -> Notification:
        """
        Queue a notification; it becomes visible at once if nothing else is.

        Raises:
            ValueError: If kind is not a known notification kind
        """
        notification = Notification(
            message=message,
            kind=NotificationKind(kind),
            timeout=self._default_timeout if timeout is None else timeout,
            undo=undo,
        )
        self._pending.append(notification)
        if self._current is None:
            self._advance()
        self._notify()
        return notification

    def dismiss(self) -> Notification | None:
        """Hide the visible notification and show the next one, if any."""
        dismissed = self._current
        self._current = None
        self._advance()
        self._notify()
        return dismissed

    def undo(self) -> bool:
        """
        Run the visible notification's undo action, then dismiss it.

        Returns False when nothing is visible or it has no undo action.
        Errors raised by the undo action propagate after the dismissal.
        """
        current = self._current
        if current is None or current.undo is None:
            return False
        try:
            current.undo()
        finally:
            self.dismiss()
        return True

    def expire(self, now: float | None = None) -> Notification | None:
        """Dismiss the visible notification if its timeout has elapsed."""
        current = self._current
        if current is None:
            return None
        now = self._clock() if now is None else now
        if current.remaining(now) > 0:
            return None
        return self.dismiss()

    def clear(self) -> None:
        self._pending.clear()
        self._current = None
        self._notify()

    def _advance(self) -> None:
        if self._current is None and self._pending:
            self._current = self._pending.popleft()
            self._current.shown_at = self._clock()
            logger.debug(
                "Showing notification %d (%s), %d pending",
                self._current.id,
                self._current.kind.value,
                len(self._pending),
            )

    def _notify(self) -> None:
        self._changed.set()

    async def _wait_for_change(self, timeout: float | None = None) -> None:
        try:
            await asyncio.wait_for(self._changed.wait(), timeout)
        except TimeoutError:
            pass

    async def run(self, display: DisplayCallback) -> None:
        """
        Consume the queue until cancelled.

        ``display`` is called with each notification as it becomes
        visible, and with None when the queue empties. It may be a plain
        function or a coroutine function; changes made while it runs are
        picked up on the next pass.
        """
        shown: Notification | None = None
        while True:
            # Clear before reading state so a change after this point wakes the wait
            self._changed.clear()
            current = self._current
            if current is not shown:
                result = display(current)
                if inspect.isawaitable(result):
                    await result
                shown = current
                continue
            if current is None:
                await self._wait_for_change()
                continue
            remaining = current.remaining(self._clock())
            if remaining <= 0:
                self.dismiss()
                continue
            await self._wait_for_change(remaining)
