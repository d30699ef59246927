"""Command execution for triggered zones."""

from __future__ import annotations

import subprocess
from typing import Sequence

from edges.log import get_logger

log = get_logger(name="spawner")


class Spawner:
    """Runs argument vectors as child processes.

    Children get their own session so Ctrl+C on the daemon does not reach
    them. In non-blocking mode finished children are reaped on the next
    spawn and on ``reap()``.
    """

    def __init__(self, blocking: bool = True) -> None:
        self.blocking = blocking
        self._children: list[subprocess.Popen] = []

    def spawn(self, argv: Sequence[str]) -> int | None:
        """Start ``argv``; return its exit status when blocking, else None."""
        self.reap()
        try:
            proc = subprocess.Popen(
                list(argv),
                start_new_session=True,
                stdin=subprocess.DEVNULL,
            )
        except (OSError, ValueError) as e:
            # ValueError: an argument holds a NUL byte
            log.warning("Failed to run %r: %s", argv[0], e)
            return None

        if self.blocking:
            status = proc.wait()
            log.debug("%s exited with status %d", argv[0], status)
            return status

        self._children.append(proc)
        return None

    def reap(self) -> int:
        """Collect finished background children; return how many remain."""
        self._children = [p for p in self._children if p.poll() is None]
        return len(self._children)
