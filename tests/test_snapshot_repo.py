from __future__ import annotations

import zipfile
from datetime import date

import pytest

from db import schema
from db.connection import get_connection
from db.repos.snapshot_repo import SnapshotRepo
from models.bundle import ExportBundle
from models.records import Connection, Invitation
from sources.archive import export_id_from_name, extract_archive


def _repo(tmp_path):
    conn = get_connection(str(tmp_path / "store" / "insights.db"))
    schema.bootstrap(conn)
    return conn, SnapshotRepo(conn)


def test_save_load_roundtrip_and_replace(tmp_path):
    conn, repo = _repo(tmp_path)
    assert repo.load() is None

    first = ExportBundle(
        export_id="01-01-2024",
        invitations=(Invitation(from_name="Alice", sent_at="1/2/24, 3:00 PM"),),
    )
    repo.save(first)
    assert repo.load() == first
    assert repo.stored_export_id() == "01-01-2024"

    second = ExportBundle(
        export_id="02-01-2024",
        connections=(Connection(first_name="Bob", last_name="B", connected_on="02 Jan 2024"),),
    )
    repo.save(second)
    loaded = repo.load()
    assert loaded == second
    assert loaded.invitations == ()
    assert conn.execute("SELECT COUNT(*) FROM snapshots").fetchone()[0] == 1

    assert repo.clear() == 1
    assert repo.load() is None
    assert repo.stored_export_id() is None
    conn.close()


def test_blob_uses_export_column_headers():
    bundle = ExportBundle(export_id="x", rich_media=())
    blob = bundle.to_blob()
    assert '"exportIdentifier":"x"' in blob
    assert '"richMedia":[]' in blob
    row = Invitation(from_name="Alice").to_row()
    assert row["From"] == "Alice"
    assert ExportBundle.from_blob({"exportIdentifier": "y"}).export_id == "y"


def test_bootstrap_is_idempotent(tmp_path):
    conn, _ = _repo(tmp_path)
    schema.bootstrap(conn)
    schema.bootstrap(conn)
    conn.close()


def test_export_id_from_name():
    assert export_id_from_name("Basic_LinkedInDataExport_12-24-2025.zip") == "12-24-2025"
    assert export_id_from_name("my_export.zip", today=date(2024, 3, 9)) == "03-09-2024"


def test_extract_archive_replaces_previous_copy(tmp_path):
    archive = tmp_path / "Basic_LinkedInDataExport_12-24-2025.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("messages.csv", "CONVERSATION ID,FOLDER\nc1,INBOX\n")
        zf.writestr("Jobs/Online Job Postings.csv", "Company Name\nAcme\n")

    uploads = tmp_path / "uploads"
    stale = uploads / "Basic_LinkedInDataExport_12-24-2025" / "stale.csv"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")

    root, export_id = extract_archive(archive, uploads)
    assert export_id == "12-24-2025"
    assert root == uploads / "Basic_LinkedInDataExport_12-24-2025"
    assert (root / "messages.csv").is_file()
    assert (root / "Jobs" / "Online Job Postings.csv").is_file()
    assert not stale.exists()


def test_extract_archive_rejects_escaping_members(tmp_path):
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../outside.csv", "x")
    with pytest.raises(ValueError):
        extract_archive(archive, tmp_path / "uploads", export_id="01-01-2024")
    assert not (tmp_path / "uploads" / "outside.csv").exists()


def test_failed_extraction_keeps_previous_copy(tmp_path):
    uploads = tmp_path / "uploads"
    previous = uploads / "Basic_LinkedInDataExport_12-24-2025" / "messages.csv"
    previous.parent.mkdir(parents=True)
    previous.write_text("CONVERSATION ID,FOLDER\nc1,INBOX\n", encoding="utf-8")

    evil = tmp_path / "Basic_LinkedInDataExport_12-24-2025.zip"
    with zipfile.ZipFile(evil, "w") as zf:
        zf.writestr("messages.csv", "replaced")
        zf.writestr("../../outside.csv", "x")
    with pytest.raises(ValueError):
        extract_archive(evil, uploads)
    assert previous.read_text(encoding="utf-8").startswith("CONVERSATION ID")

    corrupt = tmp_path / "corrupt.zip"
    corrupt.write_bytes(b"not a zip archive")
    with pytest.raises(zipfile.BadZipFile):
        extract_archive(corrupt, uploads, export_id="12-24-2025")
    assert previous.is_file()
    # No staging directories are left behind
    assert [p.name for p in uploads.iterdir()] == ["Basic_LinkedInDataExport_12-24-2025"]
