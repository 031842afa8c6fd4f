"""Custom exception hierarchy for the font zone toolchain."""

from __future__ import annotations


class FontZonesError(RuntimeError):
    """Base exception for font table generation failures."""


class FontLoadError(FontZonesError):
    """Raised when a font file cannot be read or exposes no usable cmap."""

    def __init__(self, font: str, reason: str) -> None:
        super().__init__(f"Unable to load font '{font}': {reason}")
        self.font = font
        self.reason = reason


class EncodingInvariantError(FontZonesError):
    """Raised when a table violates the artifact invariants."""


class CompactionError(FontZonesError):
    """Raised when code points reach the compactor out of order."""


class InventoryError(FontZonesError):
    """Raised when the font inventory cannot be enumerated."""


class UnknownFontError(KeyError, FontZonesError):
    """Raised when a font set references a font outside the inventory."""

    def __init__(self, font: str) -> None:
        super().__init__(font)
        self.font = font

    def __str__(self) -> str:
        return f"Font '{self.font}' is not part of the inventory."


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "CompactionError",
    "EncodingInvariantError",
    "FontLoadError",
    "FontZonesError",
    "InventoryError",
    "UnknownFontError",
    "exception_hint",
    "exception_messages",
]
