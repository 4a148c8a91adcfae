"""CLI entrypoints for GlyphArt generation, export, benchmarks, and diagnostics."""

from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict
from pathlib import Path

from glyphart_core import (
    AppConfig,
    DiagnosticsExporter,
    GenerationController,
    PerformanceController,
    PerformanceTargets,
    build_doctor_payload,
    load_config,
    render_config,
    save_config,
)
from glyphart_core.logging_setup import configure_logging, get_logger, install_crash_hooks, read_log_events
from glyphart_export import PrintPresenter, StyleParams, default_filename, get_theme, list_themes, write_static
from glyphart_renderer import (
    PATTERNS,
    ArtDocument,
    GlyphArtError,
    PresentationUnavailable,
    RenderConfig,
    bitmap_from_image,
    build_test_pattern,
    load_bitmap,
)

EXIT_GENERATION_ERROR = 2
EXIT_PRESENTATION_ERROR = 3


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _error_payload(exc: Exception) -> dict[str, object]:
    return {"success": False, "error": type(exc).__name__, "message": str(exc)}


def _invert(args: argparse.Namespace, cfg: AppConfig) -> bool:
    if args.invert is not None:
        return args.invert
    return cfg.render.invert or get_theme(args.theme or cfg.export.theme).prefers_invert


def _generate(args: argparse.Namespace, cfg: AppConfig) -> ArtDocument:
    config = render_config(cfg, characters=args.chars, invert=_invert(args, cfg), width=args.width)
    bitmap = load_bitmap(Path(args.image).expanduser())
    with GenerationController() as controller:
        return controller.generate(bitmap, config)


def _style(args: argparse.Namespace, cfg: AppConfig, document: ArtDocument) -> StyleParams:
    return StyleParams.for_viewport(
        viewport_width=args.viewport_width or cfg.export.viewport_width,
        target_width=document.width,
        theme_name=args.theme or cfg.export.theme,
    )


def _document_summary(document: ArtDocument) -> dict[str, int]:
    return {"width": document.width, "height": document.height, "cells": document.cell_count}


def cmd_generate(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        document = _generate(args, cfg)
    except GlyphArtError as exc:
        _print_json(_error_payload(exc))
        return EXIT_GENERATION_ERROR

    style = _style(args, cfg, document)
    if args.out:
        out = Path(args.out).expanduser()
    else:
        out = Path(cfg.export.output_dir or ".").expanduser() / default_filename(document)
    try:
        path = write_static(document, style, out)
    except OSError as exc:
        get_logger("cli").error("could not write %s: %s", out, exc, extra={"event": "export_static_failed"})
        payload = _error_payload(exc)
        payload["document"] = _document_summary(document)
        _print_json(payload)
        return EXIT_PRESENTATION_ERROR
    get_logger("cli").info("art written to %s", path, extra={"event": "export_static"})

    _print_json(
        {
            "success": True,
            "path": str(path.resolve()),
            "document": _document_summary(document),
            "style": {"font_size_px": style.font_size_px, "theme": style.theme.name},
        }
    )
    return 0


def cmd_print(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        document = _generate(args, cfg)
    except GlyphArtError as exc:
        _print_json(_error_payload(exc))
        return EXIT_GENERATION_ERROR

    style = _style(args, cfg, document)
    try:
        path = PrintPresenter().present(document, style)
    except PresentationUnavailable as exc:
        get_logger("cli").warning("print surface unavailable: %s", exc, extra={"event": "export_print_failed"})
        payload = _error_payload(exc)
        payload["document"] = _document_summary(document)
        _print_json(payload)
        return EXIT_PRESENTATION_ERROR

    _print_json({"success": True, "path": str(path), "document": _document_summary(document)})
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        document = _generate(args, cfg)
    except GlyphArtError as exc:
        _print_json(_error_payload(exc))
        return EXIT_GENERATION_ERROR
    print("\n".join(document.lines()))
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        config = render_config(cfg, width=args.width)
    except GlyphArtError as exc:
        _print_json(_error_payload(exc))
        return EXIT_GENERATION_ERROR

    bitmap = bitmap_from_image(build_test_pattern(args.pattern, width=800, height=480))
    perf = PerformanceController(
        PerformanceTargets(
            run_ms_max=cfg.performance.run_ms_max,
            rss_mb_max=cfg.performance.rss_mb_max,
        )
    )

    samples = []
    start = time.perf_counter()
    deadline = start + args.seconds
    with GenerationController() as controller:
        while not samples or time.perf_counter() < deadline:
            t0 = time.perf_counter()
            controller.generate(bitmap, config)
            run_ms = (time.perf_counter() - t0) * 1000
            samples.append(asdict(perf.sample(run_ms, config.target_width)))
        generation_ms = [e["duration_ms"] for e in controller.recent_events(limit=1000) if e["event"] == "run_ok"]

    run_ms_all = [s["run_ms"] for s in samples]
    cpu_max = max(s["cpu_percent"] for s in samples)
    rss_max = max(s["rss_mb"] for s in samples)
    pass_time = max(run_ms_all) <= cfg.performance.run_ms_max
    pass_mem = rss_max <= cfg.performance.rss_mb_max

    _print_json(
        {
            "pattern": args.pattern,
            "target_width": config.target_width,
            "runs": len(samples),
            "run_ms": {
                "mean": sum(run_ms_all) / len(run_ms_all),
                "max": max(run_ms_all),
            },
            "generation_ms": {
                "mean": sum(generation_ms) / len(generation_ms),
                "max": max(generation_ms),
            },
            "budget": {
                "targets": {
                    "run_ms_max": cfg.performance.run_ms_max,
                    "rss_mb_max": cfg.performance.rss_mb_max,
                },
                "max_observed": {"cpu_percent": cpu_max, "rss_mb": rss_max},
                "pass": bool(pass_time and pass_mem),
                "checks": {"run_time": pass_time, "memory": pass_mem},
                "recommended_width": min(s["recommended_width"] for s in samples),
            },
        }
    )
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    cfg = load_config()
    payload = build_doctor_payload(cfg)

    if args.export:
        exporter = DiagnosticsExporter()
        out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
        bundle = exporter.bundle(
            cfg=cfg,
            doctor_payload=payload,
            recent_generation_events=read_log_events(prefix="run_"),
            output_dir=out_dir,
        )
        payload["diagnostics_bundle"] = str(bundle)

    _print_json(payload)
    return 0


def cmd_config_show(_args: argparse.Namespace) -> int:
    _print_json(asdict(load_config()))
    return 0


def cmd_config_set(args: argparse.Namespace) -> int:
    cfg = load_config()
    if args.width is not None:
        try:
            RenderConfig.from_options(target_width=args.width)
        except GlyphArtError as exc:
            _print_json(_error_payload(exc))
            return EXIT_GENERATION_ERROR
        cfg.render.width = args.width
    if args.chars is not None:
        cfg.render.characters = args.chars
    if args.invert is not None:
        cfg.render.invert = args.invert
    if args.theme is not None:
        cfg.export.theme = args.theme
    if args.viewport_width is not None:
        cfg.export.viewport_width = max(100, args.viewport_width)

    path = save_config(cfg)
    _print_json({"success": True, "path": str(path), "config": asdict(cfg)})
    return 0


def _add_style_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--chars", default=None, help="Character cycle, darkest first (blank means 01)")
    cmd.add_argument("--invert", action=argparse.BooleanOptionalAction, default=None, help="Invert grayscale mapping")
    cmd.add_argument("--width", type=int, default=None, help="Characters per row (50-300)")
    cmd.add_argument("--theme", choices=list_themes(), default=None)
    cmd.add_argument("--viewport-width", type=int, default=None, help="Viewport width in px used for font sizing")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="glyphart", description="Turn images into character art")
    sub = parser.add_subparsers(dest="command", required=True)

    gen_cmd = sub.add_parser("generate", help="Generate art and write a static HTML file")
    gen_cmd.add_argument("image", help="Source image path")
    _add_style_options(gen_cmd)
    gen_cmd.add_argument("--out", default=None, help="Output HTML path")
    gen_cmd.set_defaults(func=cmd_generate)

    print_cmd = sub.add_parser("print", help="Generate art and open it for printing")
    print_cmd.add_argument("image", help="Source image path")
    _add_style_options(print_cmd)
    print_cmd.set_defaults(func=cmd_print)

    preview_cmd = sub.add_parser("preview", help="Print the art characters to the terminal")
    preview_cmd.add_argument("image", help="Source image path")
    _add_style_options(preview_cmd)
    preview_cmd.set_defaults(func=cmd_preview)

    bench_cmd = sub.add_parser("benchmark", help="Time repeated generation of a test pattern")
    bench_cmd.add_argument("--pattern", default="h-gradient", choices=list(PATTERNS))
    bench_cmd.add_argument("--seconds", type=float, default=5.0)
    bench_cmd.add_argument("--width", type=int, default=None)
    bench_cmd.set_defaults(func=cmd_benchmark)

    doctor_cmd = sub.add_parser("doctor", help="Print diagnostics")
    doctor_cmd.add_argument("--export", action="store_true", help="Export offline diagnostics bundle")
    doctor_cmd.add_argument("--out-dir", default=None, help="Optional output directory for diagnostics bundle")
    doctor_cmd.set_defaults(func=cmd_doctor)

    config_cmd = sub.add_parser("config", help="Show or change saved defaults")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print saved settings")
    show_cmd.set_defaults(func=cmd_config_show)
    set_cmd = config_sub.add_parser("set", help="Update saved defaults")
    set_cmd.add_argument("--chars", default=None)
    set_cmd.add_argument("--invert", action=argparse.BooleanOptionalAction, default=None)
    set_cmd.add_argument("--width", type=int, default=None)
    set_cmd.add_argument("--theme", choices=list_themes(), default=None)
    set_cmd.add_argument("--viewport-width", type=int, default=None)
    set_cmd.set_defaults(func=cmd_config_set)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=False)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
