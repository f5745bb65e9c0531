"""Schemas for the five CSV files of a LinkedIn data export.

Connections.csv is the odd one out: LinkedIn prepends a free-text ``Notes:``
preamble before the header and may append note rows after the data, so its
schema carries a header locator and a row filter.
"""
from __future__ import annotations

from models.records import Connection, ExportRecord, Invitation, JobPosting, Message, RichMedia
from sources.base import RecordSchema
from sources.csv_parser import header_prefix_locator
from sources.registry import register
from utils.date_parsing import FORMAT_CONNECTED_ON, FORMAT_SENT_AT


INVITATIONS = "invitations"
JOBS = "jobs"
MESSAGES = "messages"
RICH_MEDIA = "richMedia"
CONNECTIONS = "connections"

ALL_KINDS = (INVITATIONS, JOBS, MESSAGES, RICH_MEDIA, CONNECTIONS)

CONNECTIONS_HEADER_PREFIX = "First Name,Last Name"
_NOTES_LITERAL = "Notes:"
_PREAMBLE_MARKERS = ("when exporting", "first name")


def is_connection_row(record: ExportRecord) -> bool:
    first = record.text("First Name")
    if not (first and record.text("Last Name") and record.text("Connected On")):
        return False
    if first == _NOTES_LITERAL:
        return False
    lowered = first.lower()
    return not any(marker in lowered for marker in _PREAMBLE_MARKERS)


INVITATIONS_SCHEMA = RecordSchema(
    kind=INVITATIONS,
    file_path="Invitations.csv",
    model=Invitation,
    date_field="Sent At",
    date_format=FORMAT_SENT_AT,
)

JOBS_SCHEMA = RecordSchema(
    kind=JOBS,
    file_path="Jobs/Online Job Postings.csv",
    model=JobPosting,
    date_field="Create Date",
)

MESSAGES_SCHEMA = RecordSchema(
    kind=MESSAGES,
    file_path="messages.csv",
    model=Message,
    date_field="DATE",
)

RICH_MEDIA_SCHEMA = RecordSchema(
    kind=RICH_MEDIA,
    file_path="Rich_Media.csv",
    model=RichMedia,
    date_field="Date/Time",
)

CONNECTIONS_SCHEMA = RecordSchema(
    kind=CONNECTIONS,
    file_path="Connections.csv",
    model=Connection,
    date_field="Connected On",
    date_format=FORMAT_CONNECTED_ON,
    locate_header=header_prefix_locator(CONNECTIONS_HEADER_PREFIX),
    is_valid=is_connection_row,
)


def _register() -> None:
    for schema in (
        INVITATIONS_SCHEMA,
        JOBS_SCHEMA,
        MESSAGES_SCHEMA,
        RICH_MEDIA_SCHEMA,
        CONNECTIONS_SCHEMA,
    ):
        register(schema)


_register()
