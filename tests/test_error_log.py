from __future__ import annotations

from pathlib import Path

from citywalk.common.error_log import ErrorLog


def test_error_log_deduplicates_consecutive_same_error() -> None:
    log = ErrorLog(max_items=10)

    for _ in range(3):
        try:
            raise ValueError("boom")
        except ValueError as e:
            log.log_exception(context="update.loop", exc=e)

    items = log.items()
    assert len(items) == 1
    assert items[0].count == 3
    assert "ValueError" in items[0].message
    assert items[0].summary_line() == "update.loop: ValueError: boom (x3)"


def test_error_log_keeps_tail_only() -> None:
    log = ErrorLog(max_items=3)
    log.log_message(context="c1", message="m1")
    log.log_message(context="c2", message="m2")
    log.log_message(context="c3", message="m3")
    log.log_message(context="c4", message="m4")

    items = log.items()
    assert [it.context for it in items] == ["c2", "c3", "c4"]
    assert log.latest() is items[-1]


def test_error_log_persists_entries_to_file(tmp_path: Path) -> None:
    out = tmp_path / "logs" / "errors.log"
    log = ErrorLog(max_items=5, persist_path=out)
    log.log_message(context="assets.city", message="city_low_poly_free.glb: file not found")

    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        log.log_exception(context="update.loop", exc=e)

    text = out.read_text(encoding="utf-8")
    assert "assets.city" in text
    assert "file not found" in text
    assert "RuntimeError: boom" in text


def test_repeated_errors_are_persisted_once(tmp_path: Path) -> None:
    out = tmp_path / "errors.log"
    log = ErrorLog(persist_path=out)
    for _ in range(5):
        log.log_message(context="update.loop", message="same")

    assert out.read_text(encoding="utf-8").count("update.loop: same") == 1


def test_empty_message_gets_placeholder() -> None:
    log = ErrorLog()
    log.log_message(context="", message="  ")

    item = log.items()[0]
    assert item.context == "unknown"
    assert item.message == "Unknown error"
