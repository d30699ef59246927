"""Arrival tracking -- fire a zone once per arrival, not once per sample.

Motion samples keep coming while the pointer rests against a screen edge:
the clamped axis stays put and the other axis jitters. A sample is
suppressed when it did not move at all, or when it only slid along the
edge band it was already pressed against.
"""

from __future__ import annotations

from typing import NamedTuple

from edges.core.zones import (
    DEFAULT_BAND_FRACTION,
    Bounds,
    MonitorSet,
    Point,
    Zone,
    bounds_for,
    zone_at,
)


class FireDecision(NamedTuple):
    zone: Zone
    should_fire: bool
    bounds: Bounds


class ArrivalTracker:
    """Turns an ordered stream of pointer samples into fire decisions.

    Not thread-safe: feed it from one event source only.
    """

    def __init__(
        self, monitors: MonitorSet, band_fraction: float = DEFAULT_BAND_FRACTION
    ) -> None:
        self._monitors = monitors
        self._band_fraction = band_fraction
        # None until the first sample so that sample is never suppressed
        self.last_position: Point | None = None

    def observe(self, point: Point) -> FireDecision:
        """Record ``point`` and decide whether it is a new arrival.

        Raises GeometryInconsistency when the pointer is outside every
        monitor of a multi-monitor layout.
        """
        point = Point(*point)
        bounds = bounds_for(point, self._monitors, self._band_fraction)
        zone = zone_at(point, bounds)
        suppressed = self._is_repeat(point, bounds)
        self.last_position = point
        return FireDecision(
            zone=zone,
            should_fire=not suppressed and zone is not Zone.NONE,
            bounds=bounds,
        )

    def _is_repeat(self, point: Point, bounds: Bounds) -> bool:
        last = self.last_position
        if last is None:
            return False
        if point == last:
            return True
        if point.x == last.x and bounds.offset < point.y < bounds.max_y - bounds.offset:
            return True
        if point.y == last.y and bounds.offset < point.x < bounds.max_x - bounds.offset:
            return True
        return False
