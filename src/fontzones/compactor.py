"""Run-length encode a code point → font set index stream into zones."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from fontzones.exceptions import CompactionError


class Zone(NamedTuple):
    """Code points from ``start`` up to the next zone use font set ``font_set``."""

    start: int
    font_set: int


class RunLengthCompactor:
    """Emit a zone each time the font set index changes."""

    def __init__(self) -> None:
        self._zones: list[Zone] = []
        self._previous_index: int | None = None
        self._last_codepoint: int | None = None

    @property
    def zones(self) -> list[Zone]:
        return list(self._zones)

    def feed(self, codepoint: int, index: int) -> Zone | None:
        """Consume one code point and return the zone it opens, if any."""
        if self._last_codepoint is not None and codepoint <= self._last_codepoint:
            raise CompactionError(
                f"Code point U+{codepoint:04X} received after U+{self._last_codepoint:04X}."
            )
        self._last_codepoint = codepoint
        if self._previous_index is not None and index == self._previous_index:
            return None
        zone = Zone(codepoint, index)
        self._zones.append(zone)
        self._previous_index = index
        return zone


def compact(pairs: Iterable[tuple[int, int]]) -> list[Zone]:
    """Return the zones of an ascending ``(codepoint, index)`` stream."""
    compactor = RunLengthCompactor()
    for codepoint, index in pairs:
        compactor.feed(codepoint, index)
    return compactor.zones


__all__ = ["RunLengthCompactor", "Zone", "compact"]
