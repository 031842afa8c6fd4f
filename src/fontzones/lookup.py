"""Fallback font selection for arbitrary text on top of a compacted table."""

from __future__ import annotations

from dataclasses import dataclass, field

from fontzones.table import FontTable


@dataclass(slots=True)
class _Group:
    fonts: tuple[str, ...]
    codepoints: list[int] = field(default_factory=list)


class FontLookup:
    """Resolve characters to the fonts able to render them."""

    def __init__(self, table: FontTable) -> None:
        self.table = table

    def fonts_for(self, char: str) -> tuple[str, ...]:
        return self.table.resolve_fonts(ord(char))

    def pick(self, text: str) -> list[str | None]:
        """Return the preferred font of each character, or None when unsupported."""
        choices: list[str | None] = []
        for char in text:
            fonts = self.fonts_for(char)
            choices.append(fonts[0] if fonts else None)
        return choices

    def lookup(self, text: str) -> dict[int, tuple[tuple[str, ...], list[int]]]:
        """Group the code points of ``text`` by the font set able to render them."""
        groups: dict[int, _Group] = {}
        for char in text:
            codepoint = ord(char)
            index = self.table.font_set_index(codepoint)
            key = -1 if index is None else index
            group = groups.setdefault(key, _Group(fonts=self.table.resolve_fonts(codepoint)))
            group.codepoints.append(codepoint)
        return {key: (group.fonts, group.codepoints) for key, group in groups.items()}

    @staticmethod
    def _merge_ranges(codes: list[int]) -> list[str]:
        if not codes:
            return []
        codes = sorted(set(codes))
        merged: list[str] = []
        start = end = codes[0]
        for value in codes[1:]:
            if value == end + 1:
                end = value
            else:
                merged.append(f"U+{start:04X}" if start == end else f"U+{start:04X}-U+{end:04X}")
                start = end = value
        merged.append(f"U+{start:04X}" if start == end else f"U+{start:04X}-U+{end:04X}")
        return merged

    def summary(self, text: str) -> list[dict]:
        """Return one entry per font set used by ``text``, sorted by set index."""
        output: list[dict] = []
        for index, (fonts, codepoints) in sorted(self.lookup(text).items()):
            output.append(
                {
                    "group": None if index < 0 else index,
                    "fonts": list(fonts),
                    "ranges": self._merge_ranges(codepoints),
                    "count": len(set(codepoints)),
                }
            )
        return output

    def uncovered(self, text: str) -> list[int]:
        """Return the distinct code points of ``text`` that no font renders."""
        return sorted({ord(char) for char in text if not self.fonts_for(char)})


__all__ = ["FontLookup"]
