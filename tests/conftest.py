from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
import pytest


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((500, 0))
    pen.lineTo((500, 700))
    pen.lineTo((100, 700))
    pen.closePath()
    return pen.glyph()


def build_font(
    path: Path,
    codepoints: Iterable[int],
    *,
    family: str = "Demo",
    extra_cmap: Mapping[int, str] | None = None,
) -> Path:
    """Write a minimal TrueType font mapping ``codepoints`` to box glyphs."""
    points = sorted(set(codepoints))
    names = [f"cp{value:06X}" for value in points]
    glyph_order = [".notdef", *names]

    cmap = dict(zip(points, names))
    cmap.update(extra_cmap or {})

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf({name: _box_glyph() for name in glyph_order})
    fb.setupHorizontalMetrics({name: (600, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.setupMaxp()
    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


@pytest.fixture
def make_font(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str, codepoints: Iterable[int], **kwargs) -> Path:
        return build_font(tmp_path / "fonts" / name, codepoints, **kwargs)

    return _make
