"""Per-zone command table, tokenized once at startup."""

from __future__ import annotations

from typing import Iterator, Mapping

from edges.core.tokenize import ArgumentVector, CommandSyntaxError, tokenize
from edges.core.zones import BINDABLE_ZONES, Zone


class CommandTable:
    """Exactly one argv slot per bindable zone; a slot may be empty."""

    def __init__(self, argvs: Mapping[Zone, ArgumentVector | None] | None = None) -> None:
        argvs = argvs or {}
        unknown = [z for z in argvs if z not in BINDABLE_ZONES]
        if unknown:
            raise ValueError(f"zones cannot be bound: {unknown}")
        self._argvs: dict[Zone, ArgumentVector | None] = {
            zone: argvs.get(zone) for zone in BINDABLE_ZONES
        }

    @classmethod
    def from_strings(cls, raw: Mapping[Zone, str | None]) -> CommandTable:
        """Tokenize every configured command.

        A CommandSyntaxError is re-raised with the zone name prepended.
        """
        argvs: dict[Zone, ArgumentVector | None] = {}
        for zone, command in raw.items():
            try:
                argvs[zone] = tokenize(command)
            except CommandSyntaxError as exc:
                raise CommandSyntaxError(
                    command=exc.command, position=exc.position, zone=zone.value
                ) from exc
        return cls(argvs)

    def __getitem__(self, zone: Zone) -> ArgumentVector | None:
        if zone is Zone.NONE:
            raise KeyError(zone)
        return self._argvs[zone]

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._argvs)

    def __len__(self) -> int:
        return len(self._argvs)

    def bound_zones(self) -> list[Zone]:
        """Zones that have a command to run."""
        return [zone for zone, argv in self._argvs.items() if argv is not None]
