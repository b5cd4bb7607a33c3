from __future__ import annotations

import urllib.request
from pathlib import Path

import pytest

from citywalk.app_config import ServeConfig
from citywalk.server import StaticAssetServer, resolve_under


def _get(url: str) -> tuple[int, bytes]:
    with urllib.request.urlopen(url, timeout=5) as resp:
        return int(resp.status), resp.read()


@pytest.fixture()
def server(tmp_path: Path):
    public = tmp_path / "public"
    model = tmp_path / "model"
    (public / "js").mkdir(parents=True)
    model.mkdir()
    (public / "index.html").write_text("<html>entry</html>", encoding="utf-8")
    (public / "js" / "main.js").write_text("console.log('hi');", encoding="utf-8")
    (model / "city.glb").write_bytes(b"glTF-binary")
    (tmp_path / "secret.txt").write_text("nope", encoding="utf-8")

    srv = StaticAssetServer(ServeConfig(host="127.0.0.1", port=0, public_dir=public, model_dir=model))
    srv.start()
    try:
        yield srv
    finally:
        srv.stop()


def test_public_files_are_served(server) -> None:
    status, body = _get(f"{server.url}/js/main.js")
    assert status == 200
    assert body == b"console.log('hi');"


def test_model_files_are_served_under_model_prefix(server) -> None:
    status, body = _get(f"{server.url}/model/city.glb")
    assert status == 200
    assert body == b"glTF-binary"


def test_unknown_paths_fall_back_to_entry_point(server) -> None:
    for path in ("/", "/some/route", "/model/missing.glb", "/js/", "/main.js?x=1"):
        status, body = _get(f"{server.url}{path}")
        assert status == 200
        assert body == b"<html>entry</html>"


def test_traversal_never_leaves_the_roots(server) -> None:
    for path in ("/../secret.txt", "/model/../secret.txt", "/model/%2e%2e/secret.txt"):
        status, body = _get(f"{server.url}{path}")
        assert status == 200
        assert body != b"nope"


def test_resolve_under_rejects_escape(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    assert resolve_under(root, "/a/../b.txt") == (root / "b.txt").resolve()
    assert resolve_under(root, "/../../etc/passwd") == (root / "etc" / "passwd").resolve()
    assert resolve_under(root, "") == root.resolve()
