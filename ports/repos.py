from __future__ import annotations

from typing import Optional, Protocol

from models.bundle import ExportBundle


class SnapshotRepoPort(Protocol):
    def save(self, bundle: ExportBundle, key: str = "current") -> None:
        ...

    def load(self, key: str = "current") -> Optional[ExportBundle]:
        ...

    def stored_export_id(self, key: str = "current") -> Optional[str]:
        ...

    def clear(self) -> int:
        ...
