"""Deterministic (de)serialization of compacted font tables.

Artifacts carry three aligned collections:

`font_sets`
: Lists of font identifiers. A zone refers to a font set by its position in
  this list, so the order is part of the encoding.

`zones`
: Start code point of each zone, strictly ascending.

`mappings`
: Font set index of each zone, parallel to `zones`.

Two encodings are supported: ``json`` and ``python`` (a generated module with
``FONT_SETS``/``ZONES``/``MAPPINGS`` constants that runtime code can import or
read back without executing it).
"""

from __future__ import annotations

import ast
from collections.abc import Mapping
import json
import os
from pathlib import Path
import pprint
import tempfile
from typing import Any, Literal
import unicodedata

from fontzones.exceptions import EncodingInvariantError
from fontzones.scan import CODEPOINT_LIMIT
from fontzones.table import FONTS_SEPARATOR, FontTable


FORMAT_VERSION = 1
ArtifactFormat = Literal["json", "python"]
FORMAT_SUFFIXES: dict[str, ArtifactFormat] = {".json": "json", ".py": "python"}

_PYTHON_NAMES = {
    "FORMAT_VERSION": "format_version",
    "START": "start",
    "STOP": "stop",
    "FONT_SETS": "font_sets",
    "ZONES": "zones",
    "MAPPINGS": "mappings",
}
_PYTHON_HEADER = '"""Font fallback table generated by fontzones. Do not edit."""\n'


def format_from_path(path: Path) -> ArtifactFormat:
    """Infer the artifact format from the file suffix."""
    try:
        return FORMAT_SUFFIXES[Path(path).suffix.lower()]
    except KeyError:
        raise ValueError(
            f"Cannot infer the artifact format of '{path}'; use a .json or .py suffix."
        ) from None


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_font_id(font: object) -> None:
    if not isinstance(font, str) or not font:
        raise EncodingInvariantError(f"Invalid font identifier {font!r}.")
    if FONTS_SEPARATOR in font:
        raise EncodingInvariantError(
            f"Font identifier {font!r} contains the separator {FONTS_SEPARATOR!r}."
        )
    for char in font:
        if unicodedata.category(char) in {"Cc", "Cs"}:
            raise EncodingInvariantError(
                f"Font identifier {font!r} contains the unencodable character U+{ord(char):04X}."
            )


def validate_table(table: FontTable) -> None:
    """Raise :class:`EncodingInvariantError` unless ``table`` is well formed."""
    if not (_is_int(table.start) and _is_int(table.stop)):
        raise EncodingInvariantError("Table bounds must be integers.")
    if not 0 <= table.start < table.stop <= CODEPOINT_LIMIT:
        raise EncodingInvariantError(
            f"Table range [{table.start:#x}, {table.stop:#x}) is not a valid code point range."
        )
    if len(table.zone_starts) != len(table.zone_font_sets):
        raise EncodingInvariantError(
            f"{len(table.zone_starts)} zones but {len(table.zone_font_sets)} mappings."
        )
    if not table.zone_starts:
        raise EncodingInvariantError("Table has no zone.")

    seen: set[tuple[str, ...]] = set()
    for fonts in table.font_sets:
        for font in fonts:
            _check_font_id(font)
        if fonts in seen:
            raise EncodingInvariantError(f"Font set {list(fonts)} is registered twice.")
        seen.add(fonts)

    if table.zone_starts[0] != table.start:
        raise EncodingInvariantError(
            f"First zone starts at U+{table.zone_starts[0]:04X} instead of U+{table.start:04X}."
        )
    previous_start: int | None = None
    previous_index: int | None = None
    for start, index in zip(table.zone_starts, table.zone_font_sets):
        if not _is_int(start) or not _is_int(index):
            raise EncodingInvariantError("Zones and mappings must be integers.")
        if previous_start is not None and start <= previous_start:
            raise EncodingInvariantError(f"Zone starts are not ascending at U+{start:04X}.")
        if start >= table.stop:
            raise EncodingInvariantError(f"Zone U+{start:04X} lies outside the scanned range.")
        if not 0 <= index < len(table.font_sets):
            raise EncodingInvariantError(f"Zone U+{start:04X} points to missing font set {index}.")
        if index == previous_index:
            raise EncodingInvariantError(
                f"Zone U+{start:04X} repeats font set {index} of the previous zone."
            )
        previous_start, previous_index = start, index


def _payload(table: FontTable) -> dict[str, Any]:
    return {
        "format_version": FORMAT_VERSION,
        "start": table.start,
        "stop": table.stop,
        "font_sets": [list(fonts) for fonts in table.font_sets],
        "zones": list(table.zone_starts),
        "mappings": list(table.zone_font_sets),
    }


def _render_python(payload: Mapping[str, Any]) -> str:
    lines = [_PYTHON_HEADER]
    for name, key in _PYTHON_NAMES.items():
        value = pprint.pformat(payload[key], width=100, compact=True)
        lines.append(f"{name} = {value}\n")
    return "\n".join(lines)


def dumps(table: FontTable, format: ArtifactFormat = "json") -> str:
    """Render ``table`` in the requested format after validating it."""
    validate_table(table)
    payload = _payload(table)
    if format == "json":
        return json.dumps(payload, sort_keys=True, indent=1, ensure_ascii=True) + "\n"
    if format == "python":
        return _render_python(payload)
    raise ValueError(f"Unknown artifact format '{format}'.")


def _parse_python(text: str) -> dict[str, Any]:
    try:
        tree = ast.parse(text)
    except SyntaxError as exc:
        raise EncodingInvariantError(f"Artifact is not a valid Python module: {exc}") from exc
    payload: dict[str, Any] = {}
    for node in tree.body:
        if not isinstance(node, ast.Assign) or len(node.targets) != 1:
            continue
        target = node.targets[0]
        if isinstance(target, ast.Name) and target.id in _PYTHON_NAMES:
            try:
                payload[_PYTHON_NAMES[target.id]] = ast.literal_eval(node.value)
            except ValueError as exc:
                raise EncodingInvariantError(f"{target.id} is not a literal value.") from exc
    return payload


def _table_from_payload(payload: object) -> FontTable:
    if not isinstance(payload, Mapping):
        raise EncodingInvariantError("Artifact payload must be a mapping.")
    missing = [key for key in _PYTHON_NAMES.values() if key not in payload]
    if missing:
        raise EncodingInvariantError(f"Artifact is missing {', '.join(missing)}.")
    if payload["format_version"] != FORMAT_VERSION:
        raise EncodingInvariantError(
            f"Unsupported artifact version {payload['format_version']!r}."
        )
    font_sets = payload["font_sets"]
    zones = payload["zones"]
    mappings = payload["mappings"]
    if not all(isinstance(value, (list, tuple)) for value in (font_sets, zones, mappings)):
        raise EncodingInvariantError("font_sets, zones and mappings must be sequences.")
    if not all(isinstance(fonts, (list, tuple)) for fonts in font_sets):
        raise EncodingInvariantError("Every font set must be a sequence of font identifiers.")
    table = FontTable(
        font_sets=tuple(tuple(fonts) for fonts in font_sets),
        zone_starts=tuple(zones),
        zone_font_sets=tuple(mappings),
        start=payload["start"],
        stop=payload["stop"],
    )
    validate_table(table)
    return table


def loads(text: str, format: ArtifactFormat = "json") -> FontTable:
    """Rebuild a table from its serialized form."""
    if format == "json":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise EncodingInvariantError(f"Artifact is not valid JSON: {exc}") from exc
    elif format == "python":
        payload = _parse_python(text)
    else:
        raise ValueError(f"Unknown artifact format '{format}'.")
    return _table_from_payload(payload)


def dump(table: FontTable, path: Path, format: ArtifactFormat | None = None) -> Path:
    """Write ``table`` to ``path`` atomically and return the path."""
    path = Path(path)
    text = dumps(table, format or format_from_path(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        newline="\n",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as handle:
        tmp_path = Path(handle.name)
        try:
            handle.write(text)
        except BaseException:
            handle.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return path


def load(path: Path, format: ArtifactFormat | None = None) -> FontTable:
    """Read a table previously written by :func:`dump`."""
    path = Path(path)
    return loads(path.read_text(encoding="utf-8"), format or format_from_path(path))


__all__ = [
    "FORMAT_SUFFIXES",
    "FORMAT_VERSION",
    "ArtifactFormat",
    "dump",
    "dumps",
    "format_from_path",
    "load",
    "loads",
    "validate_table",
]
