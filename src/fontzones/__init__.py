"""Compact code point → font tables for runtime font fallback.

Architecture
: `scan` walks the code point space and asks a `CapabilityOracle` (by default
  `CmapOracle`, backed by fontTools) which fonts of the inventory render each
  character. Private-use code points resolve to no font without probing.
: `FontSetRegistry` interns every per-code-point font list into an indexed
  font set, first seen first numbered, in canonical inventory order.
: `RunLengthCompactor` keeps only the code points where the font set index
  changes; each of them opens a `Zone`.
: `FontTable` bundles the font sets and the zone arrays and answers
  `resolve_fonts(codepoint)` with a binary search. `serializer` writes and
  reads it as JSON or as a generated Python module, deterministically.
: `TableBuilder` wires the inventory, the oracle and the pieces above with
  progress reporting; the `fontzones` CLI exposes it.

Goal
: Let a runtime font selector pick a usable font for any character without
  ever re-opening font files.
"""

from __future__ import annotations

from fontzones.compactor import RunLengthCompactor, Zone, compact
from fontzones.config import BuildConfig, build_config, load_config
from fontzones.exceptions import (
    CompactionError,
    EncodingInvariantError,
    FontLoadError,
    FontZonesError,
    InventoryError,
    UnknownFontError,
)
from fontzones.inventory import FontInventory
from fontzones.logging import PipelineLogger
from fontzones.lookup import FontLookup
from fontzones.oracle import CapabilityOracle, CmapOracle, StaticOracle
from fontzones.pipeline import TableBuilder, compact_table, generate_table
from fontzones.registry import FontSet, FontSetRegistry
from fontzones.scan import SCAN_STOP, scan
from fontzones.serializer import dump, dumps, load, loads, validate_table
from fontzones.table import FONTS_SEPARATOR, FontTable
from fontzones.version import get_version


__version__ = get_version()

__all__ = [
    "FONTS_SEPARATOR",
    "SCAN_STOP",
    "BuildConfig",
    "CapabilityOracle",
    "CmapOracle",
    "CompactionError",
    "EncodingInvariantError",
    "FontInventory",
    "FontLoadError",
    "FontLookup",
    "FontSet",
    "FontSetRegistry",
    "FontTable",
    "FontZonesError",
    "InventoryError",
    "PipelineLogger",
    "RunLengthCompactor",
    "StaticOracle",
    "TableBuilder",
    "UnknownFontError",
    "Zone",
    "__version__",
    "build_config",
    "compact",
    "compact_table",
    "dump",
    "dumps",
    "generate_table",
    "load",
    "load_config",
    "loads",
    "scan",
    "validate_table",
]
