from .records import ExportRecord, Invitation, JobPosting, Message, RichMedia, Connection
from .stats import (
    NamedCount,
    InvitationStats,
    JobStats,
    MessageStats,
    RichMediaStats,
    ConnectionStats,
    DashboardStats,
)
from .bundle import ExportBundle

__all__ = [
    "ExportRecord",
    "Invitation",
    "JobPosting",
    "Message",
    "RichMedia",
    "Connection",
    "NamedCount",
    "InvitationStats",
    "JobStats",
    "MessageStats",
    "RichMediaStats",
    "ConnectionStats",
    "DashboardStats",
    "ExportBundle",
]
