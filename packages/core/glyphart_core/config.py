"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from glyphart_export import DEFAULT_THEME_NAME, DEFAULT_VIEWPORT_WIDTH, list_themes
from glyphart_renderer.models import (
    DEFAULT_CHARACTERS,
    DEFAULT_TARGET_WIDTH,
    MAX_TARGET_WIDTH,
    MIN_TARGET_WIDTH,
    RenderConfig,
)


CONFIG_VERSION = 1


@dataclass
class RenderDefaults:
    characters: str = DEFAULT_CHARACTERS
    invert: bool = False
    width: int = DEFAULT_TARGET_WIDTH


@dataclass
class ExportConfig:
    theme: str = DEFAULT_THEME_NAME
    viewport_width: int = DEFAULT_VIEWPORT_WIDTH
    output_dir: str | None = None


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    max_bundle_mb: int = 20


@dataclass
class PerformanceConfig:
    run_ms_max: float = 250.0
    rss_mb_max: float = 300.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderDefaults = field(default_factory=RenderDefaults)
    export: ExportConfig = field(default_factory=ExportConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "GlyphArt"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "GlyphArt"
    return Path.home() / ".config" / "glyphart"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_render(cfg: AppConfig) -> None:
    try:
        width = int(cfg.render.width)
    except (TypeError, ValueError):
        width = DEFAULT_TARGET_WIDTH
    cfg.render.width = max(MIN_TARGET_WIDTH, min(MAX_TARGET_WIDTH, width))
    if not isinstance(cfg.render.characters, str):
        cfg.render.characters = DEFAULT_CHARACTERS
    cfg.render.invert = bool(cfg.render.invert)


def _normalize_export(cfg: AppConfig) -> None:
    if cfg.export.theme not in list_themes():
        cfg.export.theme = DEFAULT_THEME_NAME
    try:
        viewport = int(cfg.export.viewport_width)
    except (TypeError, ValueError):
        viewport = DEFAULT_VIEWPORT_WIDTH
    cfg.export.viewport_width = max(100, viewport)


def _normalize_performance(cfg: AppConfig) -> None:
    cfg.performance.run_ms_max = float(max(10.0, cfg.performance.run_ms_max))
    cfg.performance.rss_mb_max = float(max(64.0, cfg.performance.rss_mb_max))


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(data, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        render=_merge(RenderDefaults, data.get("render", {})),
        export=_merge(ExportConfig, data.get("export", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_render(cfg)
    _normalize_export(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def render_config(
    cfg: AppConfig,
    characters: str | None = None,
    invert: bool | None = None,
    width: int | None = None,
) -> RenderConfig:
    """Saved defaults overlaid with explicit options.

    Saved values were clamped on load; explicit ones are validated and raise
    ``InvalidDimensions`` when out of range.
    """
    return RenderConfig.from_options(
        characters=cfg.render.characters if characters is None else characters,
        invert=cfg.render.invert if invert is None else invert,
        target_width=cfg.render.width if width is None else width,
    )
