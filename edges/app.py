"""Application entry point -- parses options and runs the GTK main loop."""

from __future__ import annotations

import argparse
import faulthandler
import signal
import sys
from pathlib import Path
from typing import Sequence

# Print Python traceback on SIGSEGV/SIGABRT/SIGFPE to stderr.
faulthandler.enable()

import gi  # noqa: E402

gi.require_version("Gtk", "3.0")
from gi.repository import GLib, Gtk  # noqa: E402

from edges.core.config import (  # noqa: E402
    DEFAULT_CONFIG_FILE,
    DEFAULT_POLL_INTERVAL_MS,
    Config,
    ConfigError,
)
from edges.core.tokenize import CommandSyntaxError  # noqa: E402
from edges.core.zones import (  # noqa: E402
    BINDABLE_ZONES,
    DEFAULT_BAND_FRACTION,
    GeometryInconsistency,
    Point,
    Zone,
)
from edges.daemon import DaemonContext, EdgeDaemon  # noqa: E402
from edges.log import get_logger, set_verbose  # noqa: E402
from edges.platform import display as display_mod  # noqa: E402
from edges.platform.pointer import PointerWatcher  # noqa: E402

log = get_logger(name="app")

PROG = "edges"
VERSION = "2.0.2"

ZONE_HELP = {
    Zone.TOP_LEFT: "set top left corner command CMD",
    Zone.TOP_RIGHT: "set top right corner command CMD",
    Zone.BOTTOM_RIGHT: "set bottom right corner command CMD",
    Zone.BOTTOM_LEFT: "set bottom left corner command CMD",
    Zone.LEFT: "set left edge command CMD",
    Zone.TOP: "set top edge command CMD",
    Zone.RIGHT: "set right edge command CMD",
    Zone.BOTTOM: "set bottom edge command CMD",
}

SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Run a command when the pointer hits a screen corner or edge.",
    )
    zones = parser.add_argument_group("commands")
    for zone in BINDABLE_ZONES:
        zones.add_argument(
            f"--{zone.value}",
            dest=zone.name.lower(),
            metavar="CMD",
            help=ZONE_HELP[zone],
        )
    parser.add_argument(
        "-b",
        "--no-blocking",
        dest="blocking",
        action="store_false",
        help="do not wait until child process exits",
    )
    parser.add_argument(
        "-c",
        "--use-config",
        action="store_true",
        help="use config file, ignore passed commands",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=DEFAULT_CONFIG_FILE,
        metavar="PATH",
        help="config file to read with --use-config (default: %(default)s)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=int,
        default=0,
        metavar="MS",
        help="run a command only if the pointer is still there after MS milliseconds",
    )
    parser.add_argument(
        "--band-fraction",
        type=float,
        default=DEFAULT_BAND_FRACTION,
        metavar="F",
        help="fraction of the screen height kept as dead zone next to corners",
    )
    parser.add_argument(
        "--poll-interval",
        type=int,
        default=DEFAULT_POLL_INTERVAL_MS,
        metavar="MS",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print pointer position and command calls",
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {VERSION}")
    return parser


def parse_config(argv: Sequence[str]) -> Config:
    """Turn command line arguments into a Config; exits on usage errors."""
    parser = build_parser()
    if not argv:
        parser.error("no options")
    args = parser.parse_args(argv)

    commands = {}
    for zone in BINDABLE_ZONES:
        value = getattr(args, zone.name.lower())
        if value is not None:
            commands[zone] = value

    try:
        return Config(
            blocking=args.blocking,
            use_config=args.use_config,
            verbose=args.verbose,
            delay_ms=args.delay,
            band_fraction=args.band_fraction,
            poll_interval_ms=args.poll_interval,
            config_file=args.config_file,
            commands=commands,
        )
    except ValueError as exc:
        parser.error(str(exc))


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the edges daemon; returns the exit status."""
    config = parse_config(sys.argv[1:] if argv is None else argv)
    set_verbose(config.verbose)

    try:
        display = display_mod.open_display()
        context = DaemonContext.build(config, display_mod.get_monitors(display))
    except (CommandSyntaxError, ConfigError, display_mod.DisplayError) as exc:
        log.error("%s", exc)
        return 1

    def query() -> Point:
        return display_mod.query_pointer(display)

    daemon = EdgeDaemon(context, query=query)
    failure: list[BaseException] = []

    def on_sample(point: Point) -> bool:
        try:
            daemon.on_sample(point)
        except GeometryInconsistency as exc:
            log.error("%s", exc)
            failure.append(exc)
            Gtk.main_quit()
            return False
        return True

    # Graceful shutdown on SIGINT/SIGTERM/SIGHUP
    for signum in SIGNALS:
        GLib.unix_signal_add(GLib.PRIORITY_HIGH, signum, _quit)

    watcher = PointerWatcher(
        query=query,
        on_sample=on_sample,
        interval_ms=config.poll_interval_ms,
    )
    with watcher:
        try:
            Gtk.main()
        finally:
            daemon.stop()

    return 1 if failure else 0


def _quit() -> bool:
    Gtk.main_quit()
    return False
