"""Shared file helpers for the JSON-backed adapters."""

from __future__ import annotations

import json
from pathlib import Path


class JsonFile:
    """A JSON array stored in a single UTF-8 file, created empty on demand."""

    def __init__(self, file_path: Path) -> None:
        self.path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self.path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        self.path.write_text(
            json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
