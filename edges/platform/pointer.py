"""Pointer watcher -- samples the pointer on a GLib timer.

GDK gives no motion events for the root window without a grab, so the
position is polled. Only moves are delivered: an unchanged poll is not a
motion sample. Samples reach the callback in the order they were read.
"""

from __future__ import annotations

from typing import Callable

from edges.core.zones import Point
from edges.platform.timeout import Timeout


class PointerWatcher:
    """Polls ``query`` every ``interval_ms`` and reports moves to ``on_sample``.

    ``on_sample`` returns False to stop watching. Use as a context manager
    so the timer is removed on every exit path.
    """

    def __init__(
        self,
        query: Callable[[], Point],
        on_sample: Callable[[Point], bool],
        interval_ms: int,
    ) -> None:
        self._query = query
        self._on_sample = on_sample
        self._interval_ms = interval_ms
        self._timer = Timeout()
        self._last: Point | None = None

    @property
    def running(self) -> bool:
        return self._timer.active

    def start(self) -> None:
        if not self._timer.active:
            self._timer.schedule(self._interval_ms, self._tick)

    def stop(self) -> None:
        self._timer.cancel()

    def __enter__(self) -> PointerWatcher:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _tick(self) -> bool:
        point = self._query()
        if point == self._last:
            return True
        self._last = point
        return self._on_sample(point)
