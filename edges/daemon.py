"""Daemon state and dispatch -- pointer sample in, command out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from edges.core.commands import CommandTable
from edges.core.config import Config, resolve_commands
from edges.core.tracker import ArrivalTracker, FireDecision
from edges.core.zones import MonitorSet, Point, Zone, zone_at
from edges.log import get_logger
from edges.platform.spawner import Spawner
from edges.platform.timeout import Timeout

log = get_logger(name="daemon")


@dataclass
class DaemonContext:
    """Everything the daemon needs, built once at startup."""

    config: Config
    monitors: MonitorSet
    commands: CommandTable
    tracker: ArrivalTracker
    spawner: Spawner = field(default_factory=Spawner)

    @classmethod
    def build(cls, config: Config, monitors: MonitorSet) -> DaemonContext:
        """Tokenize commands and set up tracking for ``monitors``.

        Raises CommandSyntaxError or ConfigError on bad commands.
        """
        commands = CommandTable.from_strings(resolve_commands(config))
        for zone in commands.bound_zones():
            log.debug("%s: %s", zone.value, " ".join(commands[zone]))
        return cls(
            config=config,
            monitors=monitors,
            commands=commands,
            tracker=ArrivalTracker(monitors, config.band_fraction),
            spawner=Spawner(blocking=config.blocking),
        )


class EdgeDaemon:
    """Feeds samples to the tracker and runs the command of each arrival.

    With a delay configured, an arrival is confirmed by re-reading the
    pointer after ``delay_ms``; the command runs only if the pointer is
    still in the same zone.
    """

    def __init__(self, context: DaemonContext, query: Callable[[], Point]) -> None:
        self.context = context
        self._query = query
        self._delay = Timeout()

    def on_sample(self, point: Point) -> FireDecision:
        """Handle one motion sample. GeometryInconsistency propagates."""
        log.debug("%d  %d", point.x, point.y)
        decision = self.context.tracker.observe(point)
        if not decision.should_fire:
            return decision

        delay = self.context.config.delay_ms
        if delay <= 0:
            self.dispatch(decision.zone)
        else:
            log.debug("delay: %d", delay)
            self._delay.schedule(delay, self._confirm_arrival, decision)
        return decision

    def dispatch(self, zone: Zone) -> None:
        """Run the command bound to ``zone``, if any."""
        argv = self.context.commands[zone]
        if argv is None:
            log.debug("%s: Command: None", zone.value)
            return
        log.debug("%s: Command: %s", zone.value, " ".join(argv))
        self.context.spawner.spawn(argv)

    def stop(self) -> None:
        """Drop any pending delayed command and reap finished children."""
        self._delay.cancel()
        self.context.spawner.reap()

    def _confirm_arrival(self, decision: FireDecision) -> bool:
        point = self._query()
        if zone_at(point, decision.bounds) is decision.zone:
            self.dispatch(decision.zone)
        else:
            log.debug("%s: pointer left before the delay expired", decision.zone.value)
        return False

