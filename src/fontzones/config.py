"""Configuration model for table builds.

BuildConfig

`fonts_dir` (`Path | None`)
: Directory holding the font files. Every ``.otf``/``.ttf``/``.ttc``/``.otc``
  file directly inside it is probed, in file name order. Falls back to the
  ``FONTZONES_FONTS_DIR`` environment variable when neither this nor
  `manifest` is set.

`manifest` (`Path | None`)
: YAML file listing the fonts in the order they must be probed. Takes
  precedence over the directory listing; relative entries resolve against
  `fonts_dir` when given, otherwise against the manifest location.

`output` (`Path`)
: Artifact destination. Defaults to ``fontzones.json``.

`format` (`"json" | "python" | None`)
: Artifact encoding. Inferred from the `output` suffix when omitted.

`start` / `stop` (`int`)
: Scanned code point range, ``stop`` exclusive. Defaults to the full
  ``[0, 0x10FFFF)`` range.

`skip_private_use` (`bool`)
: Resolve private-use code points to no font without probing them.

`workers` (`int`)
: Number of threads used to probe fonts.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
import yaml

from fontzones.exceptions import FontZonesError
from fontzones.scan import CODEPOINT_LIMIT, SCAN_STOP
from fontzones.serializer import FORMAT_SUFFIXES


FONTS_DIR_ENV = "FONTZONES_FONTS_DIR"


class ConfigError(FontZonesError):
    """Raised when a configuration file cannot be loaded."""


class BuildConfig(BaseModel):
    """Settings driving a single table build."""

    model_config = ConfigDict(extra="forbid")

    fonts_dir: Path | None = None
    manifest: Path | None = None
    output: Path = Path("fontzones.json")
    format: Literal["json", "python"] | None = None
    start: int = Field(default=0, ge=0)
    stop: int = Field(default=SCAN_STOP, le=CODEPOINT_LIMIT)
    skip_private_use: bool = True
    workers: int = Field(default=1, ge=1)

    @model_validator(mode="before")
    @classmethod
    def fonts_dir_from_env(cls, data: Any) -> Any:
        """Use ``FONTZONES_FONTS_DIR`` when no font source is configured."""
        if isinstance(data, Mapping) and not data.get("fonts_dir") and not data.get("manifest"):
            env_dir = os.environ.get(FONTS_DIR_ENV)
            if env_dir:
                data = {**data, "fonts_dir": env_dir}
        return data

    @model_validator(mode="after")
    def check_consistency(self) -> BuildConfig:
        """Validate the range and the font source, then infer the format."""
        if self.start >= self.stop:
            raise ValueError(f"start ({self.start:#x}) must be lower than stop ({self.stop:#x})")
        if self.fonts_dir is None and self.manifest is None:
            raise ValueError(f"fonts_dir or manifest is required (or set {FONTS_DIR_ENV})")
        if self.format is None:
            suffix = self.output.suffix.lower()
            if suffix not in FORMAT_SUFFIXES:
                raise ValueError(f"cannot infer the artifact format from '{self.output}'")
            self.format = FORMAT_SUFFIXES[suffix]
        return self


def load_config(path: Path) -> dict[str, Any]:
    """Read raw build settings from a YAML file."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{path}'.") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file '{path}' is not valid YAML.") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a mapping.")
    base_dir = Path(path).parent
    for key in ("fonts_dir", "manifest", "output"):
        value = data.get(key)
        if isinstance(value, str) and not Path(value).is_absolute():
            data[key] = str(base_dir / value)
    return data


def build_config(path: Path | None = None, **overrides: Any) -> BuildConfig:
    """Merge file settings with explicit overrides (``None`` values are ignored)."""
    data = load_config(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return BuildConfig.model_validate(data)


__all__ = ["FONTS_DIR_ENV", "BuildConfig", "ConfigError", "build_config", "load_config"]
