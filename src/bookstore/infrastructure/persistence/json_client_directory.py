"""JSON-file-backed implementation of ClientDirectory."""

from __future__ import annotations

from pathlib import Path

from bookstore.domain.collaborators.client_directory import ClientDirectory
from bookstore.domain.model.catalog import Client
from bookstore.infrastructure.persistence.json_file import JsonFile


class JsonClientDirectory(ClientDirectory):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def list_all(self) -> list[Client]:
        return [Client(id=raw["id"], name=raw["name"]) for raw in self._file.load()]

    def get_by_id(self, client_id: str) -> Client | None:
        for client in self.list_all():
            if client.id == client_id:
                return client
        return None
