"""High-level orchestration: inventory → scan → registry → zones → artifact."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from fontzones.compactor import RunLengthCompactor
from fontzones.config import BuildConfig
from fontzones.exceptions import InventoryError
from fontzones.inventory import FontInventory
from fontzones.logging import PipelineLogger
from fontzones.oracle import CapabilityOracle, CmapOracle
from fontzones.registry import FontSetRegistry
from fontzones.scan import SCAN_STOP, scan
from fontzones.serializer import dump, validate_table
from fontzones.table import FontTable


def compact_table(
    fonts: Sequence[str],
    oracle: CapabilityOracle,
    *,
    start: int = 0,
    stop: int = SCAN_STOP,
    skip_private_use: bool = True,
    workers: int = 1,
    progress: Callable[[int], None] | None = None,
) -> FontTable:
    """Probe every code point of ``[start, stop)`` and return the compacted table."""
    fonts = tuple(fonts)
    registry = FontSetRegistry(order=fonts)
    compactor = RunLengthCompactor()
    entries = scan(
        fonts,
        oracle,
        start=start,
        stop=stop,
        skip_private_use=skip_private_use,
        workers=workers,
        progress=progress,
    )
    for codepoint, supported in entries:
        compactor.feed(codepoint, registry.intern(supported))
    return FontTable.from_zones(registry.font_sets, compactor.zones, start=start, stop=stop)


def resolve_inventory(config: BuildConfig) -> FontInventory:
    """Return the inventory described by ``config``."""
    if config.manifest is not None:
        return FontInventory.from_manifest(config.manifest, root=config.fonts_dir)
    if config.fonts_dir is None:
        raise InventoryError("No font directory or manifest configured.")
    return FontInventory.from_directory(config.fonts_dir)


@dataclass(slots=True)
class TableBuilder:
    """Build, validate and write font tables with progress reporting."""

    logger: PipelineLogger = field(default_factory=PipelineLogger)
    oracle_factory: Callable[[FontInventory], CapabilityOracle] = field(
        default=lambda inventory: CmapOracle(inventory.root)
    )

    def build(self, config: BuildConfig, inventory: FontInventory | None = None) -> FontTable:
        if inventory is None:
            inventory = resolve_inventory(config)
        if not len(inventory):
            self.logger.warning("No font found; every code point resolves to an empty font set.")
        else:
            self.logger.info("Probing %d fonts from %s", len(inventory), inventory.root)

        oracle = self.oracle_factory(inventory)
        total = config.stop - config.start
        try:
            with self.logger.progress("Scanning code points", total=total) as advance:
                table = compact_table(
                    inventory.fonts,
                    oracle,
                    start=config.start,
                    stop=config.stop,
                    skip_private_use=config.skip_private_use,
                    workers=config.workers,
                    progress=advance,
                )
        finally:
            close = getattr(oracle, "close", None)
            if callable(close):
                close()

        validate_table(table)
        self.logger.notice("%d font sets, %d zones.", len(table.font_sets), len(table.zone_starts))
        self.describe(table)
        return table

    def describe(self, table: FontTable) -> None:
        """Dump every font set and zone in verbose mode."""
        for index, fonts in enumerate(table.font_sets):
            self.logger.debug("Group %d : %s", index, list(fonts))
        for start, index in zip(table.zone_starts, table.zone_font_sets):
            self.logger.debug("Zone U+%04X → Group %d", start, index)

    def write(self, table: FontTable, config: BuildConfig) -> Path:
        path = dump(table, config.output, config.format)
        self.logger.info("Font table written to %s", path)
        return path

    def run(self, config: BuildConfig) -> tuple[FontTable, Path]:
        table = self.build(config)
        return table, self.write(table, config)


def generate_table(config: BuildConfig, *, logger: PipelineLogger | None = None) -> Path:
    """Build the table described by ``config`` and write the artifact."""
    builder = TableBuilder(logger=logger or PipelineLogger())
    _table, path = builder.run(config)
    return path


__all__ = ["TableBuilder", "compact_table", "generate_table", "resolve_inventory"]
