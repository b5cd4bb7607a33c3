from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from citywalk.app_config import (
    DEFAULT_CHARACTER_FILE,
    DEFAULT_CITY_FILE,
    DEFAULT_SERVER_PORT,
    RunConfig,
    ServeConfig,
)


def _default_port() -> int:
    raw = os.environ.get("PORT", "")
    try:
        return int(raw) if raw.strip() else DEFAULT_SERVER_PORT
    except ValueError:
        return DEFAULT_SERVER_PORT


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="citywalk", description="Walk a character around a low poly city")
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run briefly offscreen, walking forward, and exit (for quick verification).",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=Path("citywalk_settings.json"),
        help="Path to JSON settings file (locomotion tuning, key bindings, bone names, HUD flags).",
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=Path("model"),
        help="Folder with the GLB models. Also served under /model in --serve mode.",
    )
    parser.add_argument("--character", default=DEFAULT_CHARACTER_FILE, help="Character model file name.")
    parser.add_argument("--city", default=DEFAULT_CITY_FILE, help="Environment model file name.")
    parser.add_argument(
        "--error-log",
        type=Path,
        default=None,
        help="Optional file collecting asset and update-loop failures.",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the static file server instead of the 3D scene.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Server bind host (--serve).")
    parser.add_argument(
        "--port",
        type=int,
        default=_default_port(),
        help=f"Server port (--serve). Defaults to $PORT, else {DEFAULT_SERVER_PORT}.",
    )
    parser.add_argument(
        "--public",
        type=Path,
        default=Path("public"),
        help="UI asset root served at / (--serve). Must contain index.html.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="[%(levelname)s] %(name)s: %(message)s")

    if args.serve:
        from citywalk.server import run_static_server

        run_static_server(
            ServeConfig(host=args.host, port=int(args.port), public_dir=args.public, model_dir=args.assets)
        )
        return

    # Panda3D is only imported for the scene mode.
    from citywalk.game import run

    run(
        RunConfig(
            smoke=bool(args.smoke),
            settings_path=args.settings,
            asset_dir=args.assets,
            character_file=str(args.character),
            city_file=str(args.city),
            error_log_path=args.error_log,
        )
    )


if __name__ == "__main__":
    main()
