"""A single GLib timeout source owned by one object."""

from __future__ import annotations

from typing import Any, Callable

import gi

gi.require_version("Gtk", "3.0")
from gi.repository import GLib  # noqa: E402


class Timeout:
    """Holds at most one pending GLib timeout.

    ``schedule`` replaces whatever was pending. The source id drops back to
    zero when the callback returns False, so ``cancel`` never removes a
    source GLib has already destroyed.
    """

    def __init__(self) -> None:
        self.source_id: int = 0

    @property
    def active(self) -> bool:
        return self.source_id != 0

    def schedule(
        self, interval_ms: int, callback: Callable[..., bool], *args: Any
    ) -> None:
        self.cancel()
        self.source_id = GLib.timeout_add(interval_ms, self._fire, callback, args)

    def cancel(self) -> None:
        if self.source_id and _is_attached(self.source_id):
            GLib.source_remove(self.source_id)
        self.source_id = 0

    def _fire(self, callback: Callable[..., bool], args: tuple) -> bool:
        keep = bool(callback(*args))
        if not keep:
            self.source_id = 0
        return keep


def _is_attached(source_id: int) -> bool:
    ctx = GLib.MainContext.default()
    return ctx.find_source_by_id(source_id) is not None
