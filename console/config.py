from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = os.path.join("configs", "rovers.yaml")


@dataclass
class PlateauConfig:
    width: int = 5
    height: int = 5


@dataclass
class RenderConfig:
    window_width: int = 600
    window_height: int = 600
    fps: int = 4
    show_trail: bool = True


@dataclass
class LoggingConfig:
    telemetry_path: Optional[str] = None


@dataclass
class AppConfig:
    plateau: PlateauConfig = field(default_factory=PlateauConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section '{name}' must be a mapping")
    return section


def config_from_dict(cfg: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig; sections or keys that are missing keep their defaults."""
    if not isinstance(cfg, dict):
        raise ValueError("config document must be a mapping")
    plateau_cfg = _section(cfg, "plateau")
    render_cfg = _section(cfg, "render")
    logging_cfg = _section(cfg, "logging")

    defaults = AppConfig()
    telemetry_path = logging_cfg.get("telemetry_path", defaults.logging.telemetry_path)
    return AppConfig(
        plateau=PlateauConfig(
            width=int(plateau_cfg.get("width", defaults.plateau.width)),
            height=int(plateau_cfg.get("height", defaults.plateau.height)),
        ),
        render=RenderConfig(
            window_width=int(render_cfg.get("window_width", defaults.render.window_width)),
            window_height=int(render_cfg.get("window_height", defaults.render.window_height)),
            fps=int(render_cfg.get("fps", defaults.render.fps)),
            show_trail=bool(render_cfg.get("show_trail", defaults.render.show_trail)),
        ),
        logging=LoggingConfig(
            telemetry_path=str(telemetry_path) if telemetry_path else None,
        ),
    )


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load the YAML config at ``path``.

    With no path, ``configs/rovers.yaml`` is used if it exists and built-in
    defaults otherwise. An explicit path that does not exist raises
    ``FileNotFoundError``.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            return AppConfig()
        path = DEFAULT_CONFIG_PATH
    return config_from_dict(load_yaml(path))
