"""Capability oracles answering whether a font can render a code point.

`CmapOracle` reads the ``cmap`` table of each font file once, keeps the set of
code points mapped to a real glyph (glyph id other than ``0``) and answers
every further probe from memory. The cache belongs to the oracle instance and
is discarded by :meth:`CmapOracle.close` or when leaving its context. A font
without a Unicode subtable raises `FontLoadError` instead of covering nothing.

`StaticOracle` answers from an in-memory coverage mapping and never touches
the filesystem.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from threading import Lock
from typing import Protocol, runtime_checkable

from fontTools.ttLib import TTFont, TTLibError

from fontzones.exceptions import FontLoadError


# (platformID, platEncID) pairs, most complete table first.
WINDOWS_UCS4 = (3, 10)
WINDOWS_BMP = (3, 1)


@runtime_checkable
class CapabilityOracle(Protocol):
    """Predicate telling whether ``font`` renders ``codepoint``."""

    def supports(self, font: str, codepoint: int) -> bool: ...


def _unicode_cmap(ttfont: TTFont) -> dict[int, str] | None:
    cmap_table = ttfont["cmap"]
    subtable = cmap_table.getcmap(*WINDOWS_UCS4) or cmap_table.getcmap(*WINDOWS_BMP)
    if subtable is not None:
        return subtable.cmap
    return ttfont.getBestCmap()


def _covered_codepoints(ttfont: TTFont, mapping: dict[int, str]) -> frozenset[int]:
    return frozenset(
        codepoint for codepoint, glyph in mapping.items() if ttfont.getGlyphID(glyph) != 0
    )


class CmapOracle:
    """Probe fonts through their character-to-glyph tables."""

    def __init__(self, root: Path, *, font_number: int = 0) -> None:
        self.root = Path(root)
        self.font_number = font_number
        self._coverage: dict[str, frozenset[int]] = {}
        self._lock = Lock()

    def __enter__(self) -> CmapOracle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Drop every cached coverage table."""
        with self._lock:
            self._coverage.clear()

    @property
    def loaded_fonts(self) -> tuple[str, ...]:
        return tuple(self._coverage)

    def _load(self, font: str) -> frozenset[int]:
        path = self.root / font
        try:
            ttfont = TTFont(path, fontNumber=self.font_number, lazy=True)
        except FileNotFoundError as exc:
            raise FontLoadError(font, f"file not found at {path}") from exc
        except (OSError, TTLibError, AssertionError, ValueError) as exc:
            raise FontLoadError(font, str(exc) or type(exc).__name__) from exc
        try:
            if "cmap" not in ttfont:
                raise FontLoadError(font, "no cmap table")
            mapping = _unicode_cmap(ttfont)
            if mapping is None:
                raise FontLoadError(font, "no usable Unicode cmap")
            return _covered_codepoints(ttfont, mapping)
        except (TTLibError, AssertionError, ValueError, KeyError, EOFError) as exc:
            raise FontLoadError(font, f"malformed cmap table ({exc})") from exc
        finally:
            ttfont.close()

    def coverage(self, font: str) -> frozenset[int]:
        """Return the code points ``font`` maps to a glyph, parsing it on first use."""
        cached = self._coverage.get(font)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._coverage.get(font)
            if cached is None:
                cached = self._load(font)
                self._coverage[font] = cached
        return cached

    def supports(self, font: str, codepoint: int) -> bool:
        return codepoint in self.coverage(font)


class StaticOracle:
    """Answer probes from a ``font -> code points`` mapping."""

    def __init__(self, coverage: Mapping[str, Iterable[int]]) -> None:
        self._coverage = {font: frozenset(points) for font, points in coverage.items()}
        self.calls = 0

    def supports(self, font: str, codepoint: int) -> bool:
        self.calls += 1
        try:
            return codepoint in self._coverage[font]
        except KeyError as exc:
            raise FontLoadError(font, "no coverage registered") from exc


__all__ = [
    "WINDOWS_BMP",
    "WINDOWS_UCS4",
    "CapabilityOracle",
    "CmapOracle",
    "StaticOracle",
]
