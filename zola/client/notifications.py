"""Transient success/error banner with a self-clearing timer."""

import asyncio
from collections.abc import Callable

from zola.models.schemas import NotificationKind


class NotificationBanner:
    """Shows one notification at a time for a fixed window.

    A new notification replaces the current one and restarts the timer;
    nothing is queued.
    """

    def __init__(self, duration: float = 2.0, on_change: Callable[[], None] | None = None) -> None:
        self.duration = duration
        self.kind: NotificationKind | None = None
        self.message: str = ""
        self._on_change = on_change
        self._timer: asyncio.Task[None] | None = None

    @property
    def visible(self) -> bool:
        return self.kind is not None

    def show(self, kind: NotificationKind, message: str) -> None:
        """Display a notification and (re)start its countdown.

        Must be called from a running event loop.
        """
        self.kind = kind
        self.message = message
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().create_task(self._expire())
        self._changed()

    def success(self, message: str) -> None:
        self.show(NotificationKind.SUCCESS, message)

    def error(self, message: str) -> None:
        self.show(NotificationKind.ERROR, message)

    def dismiss(self) -> None:
        self._cancel_timer()
        self._clear()

    async def _expire(self) -> None:
        await asyncio.sleep(self.duration)
        self._timer = None
        self._clear()

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    def _clear(self) -> None:
        self.kind = None
        self.message = ""
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
