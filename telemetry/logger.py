from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, Optional, TextIO


class TelemetryLogger:
    """Structured JSONL logger for rover events.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    Usable as a context manager; records written after ``close()`` are dropped.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_record(self, record: Dict[str, Any]) -> None:
        """Append a single event record to the JSONL file."""
        line = json.dumps(record, separators=(",", ":"), default=str)
        with self._lock:
            if self._fp is None:
                return
            self._fp.write(line + "\n")
            self._fp.flush()

    def close(self) -> None:
        with self._lock:
            if self._fp is not None:
                self._fp.close()
                self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
