"""Deduplicate per-code-point font lists into indexed font sets."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from fontzones.exceptions import UnknownFontError


FontSet = tuple[str, ...]


class FontSetRegistry:
    """Append-only collection of distinct font sets, indexed by first occurrence.

    When ``order`` is supplied, incoming lists are rearranged into that order
    before lookup so the same support set always maps to the same index, no
    matter how the probes were scheduled.
    """

    def __init__(self, order: Sequence[str] | None = None) -> None:
        self._rank: dict[str, int] | None = (
            {font: rank for rank, font in enumerate(order)} if order is not None else None
        )
        self._sets: list[FontSet] = []
        self._index: dict[FontSet, int] = {}

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[FontSet]:
        return iter(self._sets)

    def __getitem__(self, index: int) -> FontSet:
        return self._sets[index]

    @property
    def font_sets(self) -> tuple[FontSet, ...]:
        return tuple(self._sets)

    def canonical(self, fonts: Iterable[str]) -> FontSet:
        """Return ``fonts`` as a tuple in canonical inventory order."""
        values = tuple(fonts)
        if self._rank is None:
            return values
        rank = self._rank
        for font in values:
            if font not in rank:
                raise UnknownFontError(font)
        return tuple(sorted(values, key=rank.__getitem__))

    def intern(self, fonts: Iterable[str]) -> int:
        """Return the index of ``fonts``, registering it when first seen."""
        key = self.canonical(fonts)
        index = self._index.get(key)
        if index is None:
            index = len(self._sets)
            self._sets.append(key)
            self._index[key] = index
        return index


__all__ = ["FontSet", "FontSetRegistry"]
