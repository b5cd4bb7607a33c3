from __future__ import annotations

import sys
import time
import traceback
from dataclasses import dataclass
from pathlib import Path


@dataclass
class ErrorItem:
    ts: float
    context: str
    message: str
    tb: str | None
    count: int = 1

    def summary_line(self) -> str:
        base = f"{self.context}: {self.message}".strip()
        if self.count > 1:
            base += f" (x{self.count})"
        return base


class ErrorLog:
    """
    Small in-memory error buffer for asset load failures and update-loop exceptions.

    - never crashes the app because of logging
    - keeps a short feed of recent failures for the debug readout
    - collapses repeated identical errors (per-frame update loops repeat them every frame)
    """

    def __init__(self, *, max_items: int = 30, persist_path: Path | None = None) -> None:
        self._max_items = max(1, int(max_items))
        self._items: list[ErrorItem] = []
        self._last_key: tuple[str, str] | None = None
        self._persist_path = Path(persist_path) if persist_path is not None else None

    def items(self) -> list[ErrorItem]:
        return list(self._items)

    def latest(self) -> ErrorItem | None:
        return self._items[-1] if self._items else None

    def clear(self) -> None:
        self._items.clear()
        self._last_key = None

    def log_message(self, *, context: str, message: str) -> None:
        context = str(context or "unknown")
        message = str(message or "").strip() or "Unknown error"
        self._record(context=context, message=message, tb=None)

    def log_exception(self, *, context: str, exc: BaseException) -> None:
        context = str(context or "unknown")
        msg = f"{type(exc).__name__}: {exc}".strip()
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self._record(context=context, message=msg, tb=tb)

    def _record(self, *, context: str, message: str, tb: str | None) -> None:
        repeated = self._append(context=context, message=message, tb=tb)
        if repeated:
            return
        self._persist(context=context, message=message, tb=tb)
        try:
            if tb:
                print(f"[ERROR] {context}: {message}\n{tb}", file=sys.stderr)
            else:
                print(f"[ERROR] {context}: {message}", file=sys.stderr)
        except Exception:
            pass

    def _append(self, *, context: str, message: str, tb: str | None) -> bool:
        ts = time.time()
        key = (context, message)
        if self._items and self._last_key == key:
            self._items[-1].ts = ts
            self._items[-1].count += 1
            return True

        self._items.append(ErrorItem(ts=ts, context=context, message=message, tb=tb, count=1))
        self._last_key = key
        if len(self._items) > self._max_items:
            self._items = self._items[-self._max_items :]
        return False

    def _persist(self, *, context: str, message: str, tb: str | None) -> None:
        p = self._persist_path
        if p is None:
            return
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            ts = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
            lines = [f"[{ts}] {context}: {message}"]
            if isinstance(tb, str) and tb.strip():
                lines.append(tb.rstrip())
            lines.append("")
            with p.open("a", encoding="utf-8") as fh:
                fh.write("\n".join(lines))
        except Exception:
            pass
