from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
from pathlib import Path
import sys

from scriptplot import PlotError, PlotSession, RenderConfig, load_render_config


LOGGER = logging.getLogger("scriptplot")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="scriptplot")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("render", help="Run a plot script and render its commands to a PNG.")
    run.add_argument("script", type=Path)
    run.add_argument("-o", "--output", type=Path, required=True)
    run.add_argument("--config", type=Path, default=None, help="TOML file with a [render] table.")
    run.add_argument("--width", type=int, default=None)
    run.add_argument("--height", type=int, default=None)
    run.add_argument("--legend", action="store_true", help="Draw the series label box.")

    dump = sub.add_parser("dump", help="Run a plot script and print its recorded commands as JSON.")
    dump.add_argument("script", type=Path)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "render":
        try:
            config = _resolve_config(args.config, args.width, args.height, args.legend)
        except (PlotError, OSError) as exc:
            LOGGER.error("invalid render config: %s", exc)
            return 1
        session = PlotSession(config)
        if not _run_script(session, args.script):
            return 1
        try:
            out = session.render_to_file(args.output, make_parents=True)
        except PlotError as exc:
            LOGGER.error("render failed: %s", exc)
            return 1
        print(f"wrote {out}")
        return 0

    if args.command == "dump":
        session = PlotSession()
        if not _run_script(session, args.script):
            return 1
        payload = [{"command": type(cmd).__name__, **asdict(cmd)} for cmd in session.drain()]
        print(json.dumps(payload, indent=2))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def _run_script(session: PlotSession, script: Path) -> bool:
    try:
        session.run_file(script)
    except (PlotError, OSError) as exc:
        LOGGER.error("script failed: %s", exc)
        return False
    except Exception:
        # arbitrary user code
        LOGGER.exception("script %s raised", script)
        return False
    return True


def _resolve_config(config_path: Path | None, width: int | None, height: int | None, legend: bool) -> RenderConfig:
    config = load_render_config(config_path) if config_path is not None else RenderConfig()
    overrides: dict[str, object] = {}
    if width is not None:
        overrides["width"] = width
    if height is not None:
        overrides["height"] = height
    if legend:
        overrides["draw_legend"] = True
    return config.with_overrides(**overrides) if overrides else config


if __name__ == "__main__":
    sys.exit(main())
