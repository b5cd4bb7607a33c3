from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_CHARACTER_FILE = "low_poly_ninja_rigged.glb"
DEFAULT_CITY_FILE = "city_low_poly_free.glb"
DEFAULT_SERVER_PORT = 3000


@dataclass(frozen=True)
class RunConfig:
    smoke: bool = False
    # JSON settings file (tunables, key bindings, bone name table, HUD flags).
    settings_path: Path = Path("citywalk_settings.json")
    # Folder holding the GLB assets; also the root served under /model.
    asset_dir: Path = Path("model")
    character_file: str = DEFAULT_CHARACTER_FILE
    city_file: str = DEFAULT_CITY_FILE
    # Optional file that collects asset/update-loop failures across runs.
    error_log_path: Path | None = None


@dataclass(frozen=True)
class ServeConfig:
    host: str = "0.0.0.0"
    port: int = DEFAULT_SERVER_PORT
    public_dir: Path = Path("public")
    model_dir: Path = Path("model")
