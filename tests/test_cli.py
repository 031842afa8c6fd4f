from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fontzones.cli import app
from fontzones.cli._options import parse_codepoint
from fontzones.serializer import load


runner = CliRunner()


@pytest.fixture
def fonts_dir(make_font, tmp_path: Path) -> Path:
    make_font("A.ttf", [10, 11, 12])
    make_font("B.ttf", [11, 12, 13, 0x41])
    return tmp_path / "fonts"


def test_build_writes_json_artifact(fonts_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "table.json"

    result = runner.invoke(
        app, ["build", str(fonts_dir), "--stop", "U+0100", "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    assert "4 font sets" in result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["zones"] == [0, 10, 11, 13, 14, 0x41, 0x42]
    assert payload["mappings"] == [0, 1, 2, 3, 0, 3, 0]
    assert payload["font_sets"] == [[], ["A.ttf"], ["A.ttf", "B.ttf"], ["B.ttf"]]


def test_build_python_format(fonts_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "fallback_data.py"

    result = runner.invoke(
        app, ["build", str(fonts_dir), "--stop", "0x100", "-o", str(output), "-j", "2"]
    )

    assert result.exit_code == 0, result.output
    assert "FONT_SETS = " in output.read_text(encoding="utf-8")
    assert load(output).resolve_fonts(12) == ("A.ttf", "B.ttf")


def test_build_reads_config_file(fonts_dir: Path, tmp_path: Path) -> None:
    config = tmp_path / "fontzones.yml"
    config.write_text("fonts_dir: fonts\noutput: out/table.json\nstop: 256\n", encoding="utf-8")

    result = runner.invoke(app, ["build", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert load(tmp_path / "out" / "table.json").stop == 256


def test_build_reports_invalid_settings(fonts_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "t.json"
    result = runner.invoke(
        app, ["build", str(fonts_dir), "--start", "0x200", "--stop", "0x100", "-o", str(output)]
    )

    assert result.exit_code == 1
    assert "Invalid build settings" in result.output
    assert not output.exists()


def test_build_rejects_bad_code_points(fonts_dir: Path) -> None:
    result = runner.invoke(app, ["build", str(fonts_dir), "--stop", "zz"])

    assert result.exit_code != 0


def test_build_fails_on_broken_font(fonts_dir: Path, tmp_path: Path) -> None:
    (fonts_dir / "Broken.ttf").write_bytes(b"not a font at all")
    output = tmp_path / "table.json"

    result = runner.invoke(app, ["build", str(fonts_dir), "--stop", "0x80", "-o", str(output)])

    assert result.exit_code == 1
    assert "Broken.ttf" in result.output
    assert not output.exists()


def test_lookup_prints_fonts(fonts_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "table.json"
    runner.invoke(app, ["build", str(fonts_dir), "--stop", "0x100", "-o", str(output)])

    result = runner.invoke(app, ["lookup", str(output), "AA世"])

    assert result.exit_code == 0, result.output
    assert "U+0041" in result.output
    assert "B.ttf" in result.output
    assert "U+4E16" in result.output


def test_inspect_lists_groups_and_zones(fonts_dir: Path, tmp_path: Path) -> None:
    output = tmp_path / "table.json"
    runner.invoke(app, ["build", str(fonts_dir), "--stop", "0x100", "-o", str(output)])

    result = runner.invoke(app, ["inspect", str(output)])

    assert result.exit_code == 0, result.output
    assert "Font sets" in result.output
    assert "Zones" in result.output
    assert "U+000D" in result.output
    assert "A.ttf, B.ttf" in result.output


def test_inspect_rejects_corrupt_artifact(tmp_path: Path) -> None:
    artifact = tmp_path / "table.json"
    artifact.write_text('{"format_version": 1}', encoding="utf-8")

    result = runner.invoke(app, ["inspect", str(artifact)])

    assert result.exit_code == 1
    assert "Cannot load font table" in result.output


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("fontzones ")


@pytest.mark.parametrize(
    ("value", "expected"),
    [("U+10FFFF", 0x10FFFF), ("u+41", 0x41), ("0x80", 0x80), ("256", 256)],
)
def test_parse_codepoint(value: str, expected: int) -> None:
    assert parse_codepoint(value) == expected


def test_verbose_errors_include_exception_details(fonts_dir: Path, tmp_path: Path) -> None:
    (fonts_dir / "Broken.ttf").write_bytes(b"not a font at all")
    output = tmp_path / "table.json"

    result = runner.invoke(
        app, ["-v", "build", str(fonts_dir), "--stop", "0x80", "-o", str(output)]
    )

    assert result.exit_code == 1
    assert "error: " in result.output
    assert "type: FontLoadError" in result.output
