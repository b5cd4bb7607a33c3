from __future__ import annotations

import logging
import posixpath
import threading
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote, urlsplit

from citywalk.app_config import ServeConfig

logger = logging.getLogger(__name__)

MODEL_PREFIX = "/model"
ENTRY_POINT = "index.html"


def resolve_under(root: Path, url_path: str) -> Path | None:
    """Map a URL path onto a file under `root`; None if it escapes the root."""
    root = Path(root).resolve()
    clean = posixpath.normpath(unquote(url_path or "/"))
    parts = [p for p in clean.split("/") if p and p not in (".", "..")]
    candidate = root.joinpath(*parts).resolve() if parts else root
    try:
        candidate.relative_to(root)
    except ValueError:
        return None
    return candidate


class StaticAssetHandler(SimpleHTTPRequestHandler):
    """
    Public root at `/`, model root at `/model/...`, everything else -> public/index.html.

    Directory listings are never produced; unknown paths get the HTML entry point.
    """

    def __init__(self, *args, public_dir: Path, model_dir: Path, **kwargs) -> None:
        self.public_dir = Path(public_dir)
        self.model_dir = Path(model_dir)
        super().__init__(*args, directory=str(public_dir), **kwargs)

    def translate_path(self, path: str) -> str:
        url_path = urlsplit(path).path

        public = resolve_under(self.public_dir, url_path)
        if public is not None and public.is_file():
            return str(public)

        if url_path == MODEL_PREFIX or url_path.startswith(MODEL_PREFIX + "/"):
            model = resolve_under(self.model_dir, url_path[len(MODEL_PREFIX) :])
            if model is not None and model.is_file():
                return str(model)

        return str(self.public_dir.resolve() / ENTRY_POINT)

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)


class StaticAssetServer:
    """Threaded static file server; `start()` runs it in the background, `serve_forever()` blocks."""

    def __init__(self, cfg: ServeConfig) -> None:
        self.cfg = cfg
        handler = partial(StaticAssetHandler, public_dir=cfg.public_dir, model_dir=cfg.model_dir)
        self._httpd = ThreadingHTTPServer((cfg.host, int(cfg.port)), handler)
        self._thread: threading.Thread | None = None

    @property
    def port(self) -> int:
        return int(self._httpd.server_address[1])

    @property
    def url(self) -> str:
        host = self.cfg.host if self.cfg.host not in ("", "0.0.0.0") else "localhost"
        return f"http://{host}:{self.port}"

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._httpd.serve_forever, name="citywalk-static", daemon=True)
        self._thread.start()
        logger.info("Serving %s (models: %s) at %s", self.cfg.public_dir, self.cfg.model_dir, self.url)

    def serve_forever(self) -> None:
        logger.info("Serving %s (models: %s) at %s", self.cfg.public_dir, self.cfg.model_dir, self.url)
        try:
            self._httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down server")
        finally:
            self._httpd.server_close()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join(timeout=2.0)
        self._thread = None


def run_static_server(cfg: ServeConfig) -> None:
    StaticAssetServer(cfg).serve_forever()
