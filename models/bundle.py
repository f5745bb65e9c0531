from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .records import Connection, ExportRecord, Invitation, JobPosting, Message, RichMedia


class ExportBundle(BaseModel):
    """Typed record collections of one export, keyed by kind.

    This is also the persisted snapshot shape: ``to_blob`` / ``from_blob``
    round-trip through JSON using the export's column headers.
    """

    export_id: str | None = Field(default=None, alias="exportIdentifier")
    invitations: Tuple[Invitation, ...] = ()
    jobs: Tuple[JobPosting, ...] = ()
    messages: Tuple[Message, ...] = ()
    rich_media: Tuple[RichMedia, ...] = Field(default=(), alias="richMedia")
    connections: Tuple[Connection, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def records(self, kind: str) -> Tuple[ExportRecord, ...]:
        if kind == "richMedia":
            return self.rich_media
        if kind in ("invitations", "jobs", "messages", "connections"):
            return getattr(self, kind)
        raise KeyError(f"Unknown record kind: {kind}")

    def counts(self) -> Dict[str, int]:
        return {
            "invitations": len(self.invitations),
            "jobs": len(self.jobs),
            "messages": len(self.messages),
            "richMedia": len(self.rich_media),
            "connections": len(self.connections),
        }

    def to_blob(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_blob(cls, blob: str | bytes | Dict[str, Any]) -> "ExportBundle":
        if isinstance(blob, dict):
            return cls.model_validate(blob)
        return cls.model_validate_json(blob)
