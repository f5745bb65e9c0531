from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.aggregation'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    # Settings are cached per process; tests monkeypatch env between calls
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


INVITATIONS_CSV = (
    "From,To,Sent At,Message,Direction,inviterProfileUrl,inviteeProfileUrl\n"
    "Alice Example,Bob Builder,\"1/2/24, 3:00 PM\",Hi Bob,OUTGOING,https://linkedin.com/in/alice,https://linkedin.com/in/bob\n"
    "Carol Jones,Alice Example,\"1/15/24, 9:30 AM\",,INCOMING,https://linkedin.com/in/carol,https://linkedin.com/in/alice\n"
    "Alice Example,Dan Smith,\"3/4/24, 11:05 AM\",  ,OUTGOING,https://linkedin.com/in/alice,https://linkedin.com/in/dan\n"
    "Alice Example,Eve Adams,not a date,Hello,OUTGOING,https://linkedin.com/in/alice,https://linkedin.com/in/eve\n"
)

JOBS_CSV = (
    "Company Name,Title,Employment Status,Job State,Create Date\n"
    "Acme,Engineer,FULL_TIME,OPEN,2024-01-10 10:00:00\n"
    "Acme,Designer,PART_TIME,LISTED,2024-02-01 08:00:00\n"
    "Globex,Analyst,FULL_TIME,CLOSED,2024-02-15 12:00:00\n"
    "Initech,Intern,CONTRACT,DRAFT,\n"
    ",Ghost,FULL_TIME,,2024-03-01\n"
)

MESSAGES_CSV = (
    "CONVERSATION ID,CONVERSATION TITLE,FROM,SENDER PROFILE URL,TO,RECIPIENT PROFILE URLS,DATE,SUBJECT,CONTENT,FOLDER,ATTACHMENTS,IS MESSAGE DRAFT\n"
    "c1,,Alice,https://linkedin.com/in/alice,Bob,https://linkedin.com/in/bob,2024-01-05 10:00:00 UTC,,Hello Bob,SENT,,No\n"
    "c1,,Bob,https://linkedin.com/in/bob,Alice,https://linkedin.com/in/alice,2024-01-06 11:00:00 UTC,,\"Hi Alice,\nhow are you?\",INBOX,,No\n"
    "c2,,Alice,https://linkedin.com/in/alice,Carol,https://linkedin.com/in/carol,2024-02-01 09:00:00 UTC,,Draft text,SENT,,Yes\n"
    "c3,,Dan,https://linkedin.com/in/dan,Alice,https://linkedin.com/in/alice,2024-02-03 09:00:00 UTC,,Old thread,ARCHIVED,,No\n"
)

RICH_MEDIA_CSV = (
    "Date/Time,Media Description,Media Link\n"
    "2024-01-02 10:00:00,You uploaded a profile photo,https://media.example/1\n"
    "2024-01-03 10:00:00,You shared a Feed Photo,https://media.example/2\n"
    "2024-01-04 10:00:00,You changed your background photo,\n"
    "2024-01-05 10:00:00,Something else,\n"
)

CONNECTIONS_CSV = (
    "Notes:\n"
    "\"When exporting your connection data, you may notice that some of the email addresses are missing. "
    "You will only see email addresses for connections who have allowed their connections to see or download their email address.\"\n"
    "\n"
    "First Name,Last Name,URL,Email Address,Company,Position,Connected On\n"
    "Bob,Builder,https://linkedin.com/in/bob,bob@example.com,Acme,Engineer,02 Jan 2024\n"
    "Carol,Jones,https://linkedin.com/in/carol,,Globex,Analyst,15 Jan 2024\n"
    "Dan,Smith,https://linkedin.com/in/dan,,Acme ,Manager,03 Mar 2024\n"
    "Erin,Stone,https://linkedin.com/in/erin,erin@example.com,,Founder,10 Mar 2024\n"
    "Notes:,see above,,,,,01 Jan 2024\n"
)


def write_export(root: Path, include=("invitations", "jobs", "messages", "richMedia", "connections")) -> Path:
    """Lay out a minimal export tree with the requested kinds."""
    files = {
        "invitations": ("Invitations.csv", INVITATIONS_CSV),
        "jobs": ("Jobs/Online Job Postings.csv", JOBS_CSV),
        "messages": ("messages.csv", MESSAGES_CSV),
        "richMedia": ("Rich_Media.csv", RICH_MEDIA_CSV),
        "connections": ("Connections.csv", CONNECTIONS_CSV),
    }
    root.mkdir(parents=True, exist_ok=True)
    for kind in include:
        rel, text = files[kind]
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def export_dir(tmp_path):
    return write_export(tmp_path / "Basic_LinkedInDataExport_12-24-2025")


@pytest.fixture
def make_export(tmp_path):
    def _make(include, name="Basic_LinkedInDataExport_12-24-2025"):
        return write_export(tmp_path / name, include)
    return _make
