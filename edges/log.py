"""Logging configuration for the daemon.

The level comes from the EDGES_LOG_LEVEL env var (default WARNING).
``--verbose`` drops the 'edges' namespace to DEBUG, which traces every
pointer sample and every command call.
"""

import logging
import os

NAMESPACE = "edges"
DEFAULT_LEVEL = logging.WARNING


def env_level() -> int:
    """Level named by EDGES_LOG_LEVEL; unknown names fall back to WARNING."""
    name = os.environ.get("EDGES_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else DEFAULT_LEVEL


logging.basicConfig(
    format="%(asctime)s.%(msecs)03d %(name)-14s %(levelname)-5s %(message)s",
    datefmt="%H:%M:%S",
    level=env_level(),
)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the 'edges.' namespace."""
    return logging.getLogger(f"{NAMESPACE}.{name}")


def set_verbose(verbose: bool) -> None:
    """Trace at DEBUG when verbose, else inherit the env-configured level."""
    logging.getLogger(NAMESPACE).setLevel(logging.DEBUG if verbose else logging.NOTSET)
