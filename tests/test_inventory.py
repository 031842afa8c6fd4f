from __future__ import annotations

from pathlib import Path

import pytest

from fontzones.exceptions import InventoryError
from fontzones.inventory import FontInventory


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_directory_inventory_is_sorted_and_filtered(tmp_path: Path) -> None:
    for name in ("KhmerOS.ttf", "DroidSans.TTF", "Emoji.otf", "README.md", "Collection.ttc"):
        _touch(tmp_path / name)
    (tmp_path / "nested.ttf").mkdir()

    inventory = FontInventory.from_directory(tmp_path)

    assert inventory.fonts == ("Collection.ttc", "DroidSans.TTF", "Emoji.otf", "KhmerOS.ttf")
    assert len(inventory) == 4
    assert inventory.path("Emoji.otf") == tmp_path / "Emoji.otf"


def test_directory_inventory_may_be_empty(tmp_path: Path) -> None:
    assert FontInventory.from_directory(tmp_path).fonts == ()


def test_missing_directory_is_an_inventory_error(tmp_path: Path) -> None:
    with pytest.raises(InventoryError):
        FontInventory.from_directory(tmp_path / "nowhere")


def test_manifest_list_keeps_declared_order(tmp_path: Path) -> None:
    _touch(tmp_path / "B.ttf")
    _touch(tmp_path / "A.ttf")
    manifest = tmp_path / "fonts.yaml"
    manifest.write_text("- B.ttf\n- A.ttf\n", encoding="utf-8")

    inventory = FontInventory.from_manifest(manifest)

    assert list(inventory) == ["B.ttf", "A.ttf"]
    assert inventory.root == tmp_path


def test_manifest_mapping_resolves_root(tmp_path: Path) -> None:
    _touch(tmp_path / "fonts" / "KhmerOS.ttf")
    manifest = tmp_path / "fonts.yaml"
    manifest.write_text("root: fonts\nfonts:\n  - KhmerOS.ttf\n", encoding="utf-8")

    inventory = FontInventory.from_manifest(manifest)

    assert inventory.root == tmp_path / "fonts"
    assert inventory.fonts == ("KhmerOS.ttf",)


def test_manifest_reports_missing_files(tmp_path: Path) -> None:
    manifest = tmp_path / "fonts.yaml"
    manifest.write_text("- Ghost.ttf\n", encoding="utf-8")

    with pytest.raises(InventoryError, match="Ghost.ttf"):
        FontInventory.from_manifest(manifest)


@pytest.mark.parametrize("payload", ["fonts: [1, 2]\n", "just a string\n", "[unclosed\n"])
def test_manifest_rejects_invalid_payloads(tmp_path: Path, payload: str) -> None:
    manifest = tmp_path / "fonts.yaml"
    manifest.write_text(payload, encoding="utf-8")

    with pytest.raises(InventoryError):
        FontInventory.from_manifest(manifest)


def test_duplicate_fonts_are_rejected(tmp_path: Path) -> None:
    with pytest.raises(InventoryError):
        FontInventory(root=tmp_path, fonts=("A.ttf", "A.ttf"))
