"""Enumerate font resources in a fixed, reproducible order."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import yaml

from fontzones.exceptions import InventoryError


FONT_SUFFIXES = frozenset({".otf", ".ttf", ".ttc", ".otc"})


@dataclass(frozen=True, slots=True)
class FontInventory:
    """Ordered font identifiers resolved against a root directory.

    The position of a font in ``fonts`` is its canonical rank: probing and
    font-set normalisation both follow it.
    """

    root: Path
    fonts: tuple[str, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for font in self.fonts:
            if font in seen:
                raise InventoryError(f"Font '{font}' is listed more than once.")
            seen.add(font)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fonts)

    def __len__(self) -> int:
        return len(self.fonts)

    def path(self, font: str) -> Path:
        """Return the on-disk location of ``font``."""
        return self.root / font

    @classmethod
    def from_directory(
        cls, root: Path, *, suffixes: Iterable[str] = FONT_SUFFIXES
    ) -> FontInventory:
        """List font files directly inside ``root``, sorted by file name."""
        root = Path(root)
        if not root.is_dir():
            raise InventoryError(f"Font directory '{root}' does not exist.")
        allowed = {suffix.lower() for suffix in suffixes}
        fonts = sorted(
            entry.name
            for entry in root.iterdir()
            if entry.is_file() and entry.suffix.lower() in allowed
        )
        return cls(root=root, fonts=tuple(fonts))

    @classmethod
    def from_manifest(cls, manifest: Path, *, root: Path | None = None) -> FontInventory:
        """Read an ordered YAML manifest.

        The manifest is either a list of file names or a mapping with a
        ``fonts`` list and an optional ``root`` relative to the manifest.
        """
        manifest = Path(manifest)
        try:
            data = yaml.safe_load(manifest.read_text(encoding="utf-8"))
        except OSError as exc:
            raise InventoryError(f"Unable to read font manifest '{manifest}'.") from exc
        except yaml.YAMLError as exc:
            raise InventoryError(f"Font manifest '{manifest}' is not valid YAML.") from exc

        base_dir = manifest.parent
        if isinstance(data, dict):
            if root is None and isinstance(data.get("root"), str):
                root = base_dir / data["root"]
            entries = data.get("fonts")
        else:
            entries = data
        if entries is None:
            entries = []
        if not isinstance(entries, list) or not all(isinstance(item, str) for item in entries):
            raise InventoryError(f"Font manifest '{manifest}' must list font file names.")

        resolved_root = Path(root) if root is not None else base_dir
        missing = [item for item in entries if not (resolved_root / item).is_file()]
        if missing:
            raise InventoryError(
                f"Font manifest '{manifest}' lists missing files: {', '.join(missing)}"
            )
        return cls(root=resolved_root, fonts=tuple(entries))


__all__ = ["FONT_SUFFIXES", "FontInventory"]
