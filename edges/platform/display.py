"""Display access via GDK -- session check, monitor layout, pointer position.

Everything here talks to the X server through GDK and hands plain data
(Rect, MonitorSet, Point) to the core.
"""

from __future__ import annotations

import os

import gi

gi.require_version("Gdk", "3.0")
gi.require_version("Gtk", "3.0")
# Importing Gtk initializes GDK, so Gdk.Display.get_default() works.
from gi.repository import Gdk, Gtk  # noqa: E402, F401

from edges.core.zones import MonitorSet, Point, Rect
from edges.log import get_logger

log = get_logger(name="display")


class DisplayError(RuntimeError):
    """No usable X display."""


def check_session() -> None:
    """Refuse Wayland sessions, where the global pointer cannot be read."""
    if os.environ.get("WAYLAND_DISPLAY"):
        raise DisplayError("Global pointer query not supported on Wayland")


def open_display() -> Gdk.Display:
    """Return the default display, or raise DisplayError."""
    check_session()
    display = Gdk.Display.get_default()
    if display is None:
        raise DisplayError("Cannot open display")
    log.debug("Opened display %s", display.get_name())
    return display


def get_monitors(display: Gdk.Display) -> MonitorSet:
    """Snapshot the monitor layout in logical pixels."""
    rects = []
    for i in range(display.get_n_monitors()):
        geom = display.get_monitor(i).get_geometry()
        rects.append(Rect(x=geom.x, y=geom.y, width=geom.width, height=geom.height))
    if not rects:
        raise DisplayError("Failed to get monitors")

    screen = display.get_default_screen()
    monitors = MonitorSet(
        rects=tuple(rects),
        screen_width=screen.get_width(),
        screen_height=screen.get_height(),
    )
    log.debug(
        "Screen %dx%d, monitors: %s",
        monitors.screen_width,
        monitors.screen_height,
        ", ".join(f"{r.width}x{r.height}+{r.x}+{r.y}" for r in rects),
    )
    return monitors


def query_pointer(display: Gdk.Display) -> Point:
    """Current pointer position in screen coordinates."""
    pointer = display.get_default_seat().get_pointer()
    _, x, y = pointer.get_position()
    return Point(x=x, y=y)
