from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Stats shape served to the dashboard: camelCase keys on the wire."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class NamedCount(_WireModel):
    name: str
    value: int


class InvitationStats(_WireModel):
    total: int = 0
    outgoing: int = 0
    incoming: int = 0
    with_message: int = Field(default=0, alias="withMessage")
    monthly: Dict[str, int] = Field(default_factory=dict)


class JobStats(_WireModel):
    total: int = 0
    active: int = 0
    closed: int = 0
    draft: int = 0
    unique_companies: int = Field(default=0, alias="uniqueCompanies")


class MessageStats(_WireModel):
    total: int = 0
    inbox: int = 0
    sent: int = 0
    drafts: int = 0
    unique_conversations: int = Field(default=0, alias="uniqueConversations")


class RichMediaStats(_WireModel):
    total: int = 0
    profile_photos: int = Field(default=0, alias="profilePhotos")
    feed_photos: int = Field(default=0, alias="feedPhotos")
    background_photos: int = Field(default=0, alias="backgroundPhotos")


class ConnectionStats(_WireModel):
    total: int = 0
    with_email: int = Field(default=0, alias="withEmail")
    unique_companies: int = Field(default=0, alias="uniqueCompanies")
    monthly: Dict[str, int] = Field(default_factory=dict)
    top_companies: List[NamedCount] = Field(default_factory=list, alias="topCompanies")


class DashboardStats(_WireModel):
    invitations: InvitationStats = Field(default_factory=InvitationStats)
    jobs: JobStats = Field(default_factory=JobStats)
    messages: MessageStats = Field(default_factory=MessageStats)
    rich_media: RichMediaStats = Field(default_factory=RichMediaStats, alias="richMedia")
    connections: ConnectionStats = Field(default_factory=ConnectionStats)
