from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import yaml

from console.config import RenderConfig, load_config
from console.file_session import FileSession
from console.manual_session import ManualSession
from rover_grid.errors import RoverError
from telemetry.logger import TelemetryLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Drive rovers across a plateau.")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--input",
        type=str,
        help="Path to a mission file (plateau line, then rover/command line pairs).",
    )
    mode.add_argument(
        "--manual",
        action="store_true",
        help="Place rovers and enter commands interactively.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML config (default: configs/rovers.yaml if present).",
    )
    parser.add_argument(
        "--telemetry-path",
        type=str,
        default=None,
        help="Append JSONL telemetry records to this file.",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Play the --input mission back one command at a time in a pygame window.",
    )
    return parser


def _wait_for_close(renderer, fps: int) -> None:
    while renderer.pump():
        renderer.tick(fps)


def play_session(session: FileSession, render_cfg: RenderConfig) -> None:
    """Run a prepared file session command by command, drawing each step."""
    from rover_grid.render import GridRenderer

    controller = session.controller
    renderer = GridRenderer(
        controller,
        window_width=render_cfg.window_width,
        window_height=render_cfg.window_height,
        show_trail=render_cfg.show_trail,
    )
    try:
        renderer.draw("ready")
        for rover_id, command in session.steps():
            if not renderer.pump():
                return
            renderer.tick(render_cfg.fps)
            try:
                controller.run_commands(rover_id, [command])
            except RoverError as exc:
                renderer.draw(f"rover {rover_id}: {exc}", error=True)
                _wait_for_close(renderer, render_cfg.fps)
                raise
            renderer.draw(f"rover {rover_id}: {command.letter}")
        renderer.draw("done - close the window to exit")
        _wait_for_close(renderer, render_cfg.fps)
    finally:
        renderer.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.render and args.manual:
        parser.error("--render only applies to --input missions")

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: cannot load config: {exc}", file=sys.stderr)
        return 1

    telemetry_path = args.telemetry_path or cfg.logging.telemetry_path
    telemetry_logger = TelemetryLogger(telemetry_path) if telemetry_path else None

    try:
        if args.manual:
            session = ManualSession(
                default_dimensions=(cfg.plateau.width, cfg.plateau.height),
                telemetry_logger=telemetry_logger,
            )
            session.run()
            return 0

        session = FileSession(args.input, telemetry_logger=telemetry_logger)
        try:
            session.setup()
            if args.render:
                play_session(session, cfg.render)
            else:
                session.run()
        except (RoverError, OSError) as exc:
            session.print_results()
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        session.print_results()
        return 0
    finally:
        if telemetry_logger is not None:
            telemetry_logger.close()


if __name__ == "__main__":
    sys.exit(main())
