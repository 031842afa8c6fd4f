"""Compacted font table and its runtime lookup."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from fontzones.compactor import Zone
from fontzones.registry import FontSet
from fontzones.scan import SCAN_STOP


# Runtime consumers join font lists with this character.
FONTS_SEPARATOR = ","


@dataclass(frozen=True, slots=True)
class FontTable:
    """Font sets plus the zone arrays pointing into them.

    ``zone_starts`` and ``zone_font_sets`` are parallel: zone ``i`` covers
    ``[zone_starts[i], zone_starts[i + 1])`` (the last one ends at ``stop``)
    and uses ``font_sets[zone_font_sets[i]]``.
    """

    font_sets: tuple[FontSet, ...]
    zone_starts: tuple[int, ...]
    zone_font_sets: tuple[int, ...]
    start: int = 0
    stop: int = SCAN_STOP

    @classmethod
    def from_zones(
        cls,
        font_sets: Iterable[Sequence[str]],
        zones: Iterable[Zone],
        *,
        start: int = 0,
        stop: int = SCAN_STOP,
    ) -> FontTable:
        zone_list = list(zones)
        return cls(
            font_sets=tuple(tuple(fonts) for fonts in font_sets),
            zone_starts=tuple(zone.start for zone in zone_list),
            zone_font_sets=tuple(zone.font_set for zone in zone_list),
            start=start,
            stop=stop,
        )

    @property
    def zones(self) -> tuple[Zone, ...]:
        return tuple(Zone(s, i) for s, i in zip(self.zone_starts, self.zone_font_sets))

    def font_set_index(self, codepoint: int) -> int | None:
        """Return the font set index for ``codepoint``, or None when out of range."""
        if not self.start <= codepoint < self.stop:
            return None
        position = bisect_right(self.zone_starts, codepoint) - 1
        if position < 0:
            return None
        return self.zone_font_sets[position]

    def resolve_fonts(self, codepoint: int) -> FontSet:
        """Return the fonts able to render ``codepoint``, in inventory order."""
        index = self.font_set_index(codepoint)
        if index is None:
            return ()
        return self.font_sets[index]

    def iter_ranges(self) -> Iterator[tuple[int, int, FontSet]]:
        """Yield ``(first, last, fonts)`` for every zone, ``last`` inclusive."""
        bounds = (*self.zone_starts[1:], self.stop)
        for first, end, index in zip(self.zone_starts, bounds, self.zone_font_sets):
            yield first, end - 1, self.font_sets[index]


__all__ = ["FONTS_SEPARATOR", "FontTable"]
