"""Zone classification -- which corner or edge the pointer is touching.

Coordinate convention: the unified X screen space, origin top-left, every
monitor a rectangle inside it. A pointer at the far edge of a monitor sits
at ``x + width - 1`` / ``y + height - 1``.

    (0,0) TOP_LEFT ----------- TOP ------------ TOP_RIGHT (max_x,0)
      |      :                                      :      |
      |  dead zone                              dead zone  |
      |      :                                      :      |
     LEFT                       NONE                     RIGHT
      |      :                                      :      |
      |  dead zone                              dead zone  |
      |      :                                      :      |
    BOTTOM_LEFT -------------- BOTTOM ------------- BOTTOM_RIGHT (max_x,max_y)

The dead zones are ``offset`` pixels long, where
``offset = floor(max_y * band_fraction)``. The offset is derived from the
vertical extent for all four edges, so on a wide screen the top and
bottom dead zones are shorter relative to the edge than the left and
right ones.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

DEFAULT_BAND_FRACTION = 0.25


class GeometryInconsistency(RuntimeError):
    """The monitor layout does not account for the pointer position."""


class Zone(str, enum.Enum):
    """Where the pointer is; values double as config keys."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM_LEFT = "bottom-left"
    LEFT = "left"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    NONE = "none"


BINDABLE_ZONES: tuple[Zone, ...] = tuple(z for z in Zone if z is not Zone.NONE)


class Point(NamedTuple):
    x: int
    y: int


class Rect(NamedTuple):
    """One monitor's geometry in screen coordinates."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, point: Point) -> bool:
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )


class Bounds(NamedTuple):
    """Far edges of the area the pointer is in, and the corner dead zone."""

    max_x: int
    max_y: int
    offset: int


@dataclass(frozen=True)
class MonitorSet:
    """Monitors in a stable order plus the virtual screen size."""

    rects: tuple[Rect, ...]
    screen_width: int
    screen_height: int

    @classmethod
    def from_rects(cls, rects: Sequence[Rect]) -> MonitorSet:
        """Build a set whose screen size is the union of ``rects``."""
        if not rects:
            raise GeometryInconsistency("no monitors")
        return cls(
            rects=tuple(rects),
            screen_width=max(r.x + r.width for r in rects),
            screen_height=max(r.y + r.height for r in rects),
        )

    def __len__(self) -> int:
        return len(self.rects)

    def monitor_at(self, point: Point) -> Rect:
        """First monitor containing ``point``."""
        for rect in self.rects:
            if rect.contains(point):
                return rect
        raise GeometryInconsistency(
            f"pointer at ({point.x}, {point.y}) is outside every monitor"
        )


def effective_bounds(point: Point, monitors: MonitorSet) -> tuple[int, int]:
    """Return (max_x, max_y) for the monitor the pointer is on.

    With a single monitor this is the whole screen. With several, an axis
    is clamped to the containing monitor's far edge unless that monitor
    already reaches the screen's far edge on that axis.
    """
    if not monitors.rects:
        raise GeometryInconsistency("no monitors")

    max_x = monitors.screen_width - 1
    max_y = monitors.screen_height - 1

    if len(monitors) == 1:
        return max_x, max_y

    rect = monitors.monitor_at(point)
    if rect.x + rect.width <= max_x:
        max_x = rect.x + rect.width - 1
    if rect.y + rect.height <= max_y:
        max_y = rect.y + rect.height - 1
    return max_x, max_y


def band_offset(max_y: int, band_fraction: float) -> int:
    """Length of the corner dead zone, from the vertical extent only."""
    return math.floor(max_y * band_fraction)


def bounds_for(point: Point, monitors: MonitorSet, band_fraction: float) -> Bounds:
    max_x, max_y = effective_bounds(point, monitors)
    return Bounds(max_x=max_x, max_y=max_y, offset=band_offset(max_y, band_fraction))


def zone_at(point: Point, bounds: Bounds) -> Zone:
    """Classify ``point`` against precomputed bounds.

    Corners are tested first so they win over edges on shared pixels.
    """
    x, y = point
    max_x, max_y, offset = bounds

    if x == 0 and y == 0:
        return Zone.TOP_LEFT
    if x == max_x and y == 0:
        return Zone.TOP_RIGHT
    if x == max_x and y == max_y:
        return Zone.BOTTOM_RIGHT
    if x == 0 and y == max_y:
        return Zone.BOTTOM_LEFT
    if x == 0 and offset < y < max_y - offset:
        return Zone.LEFT
    if y == 0 and offset < x < max_x - offset:
        return Zone.TOP
    if x == max_x and offset < y < max_y - offset:
        return Zone.RIGHT
    if y == max_y and offset < x < max_x - offset:
        return Zone.BOTTOM
    return Zone.NONE


def classify(
    point: Point, monitors: MonitorSet, band_fraction: float = DEFAULT_BAND_FRACTION
) -> Zone:
    """Return the zone ``point`` falls in for this monitor layout."""
    return zone_at(point, bounds_for(point, monitors, band_fraction))
