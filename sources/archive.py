from __future__ import annotations

import logging
import re
import shutil
import tempfile
import zipfile
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from config.settings import EXPORT_DIR_PREFIX


logger = logging.getLogger(__name__)

_EXPORT_NAME_RE = re.compile(r"Basic_LinkedInDataExport_(\d{2}-\d{2}-\d{4})", re.IGNORECASE)


def export_id_from_name(name: str, today: Optional[date] = None) -> str:
    """Pull the ``MM-DD-YYYY`` export date out of an archive or folder name."""
    m = _EXPORT_NAME_RE.search(name or "")
    if m:
        return m.group(1)
    return (today or date.today()).strftime("%m-%d-%Y")


def extract_archive(zip_path: Path, uploads_dir: Path, export_id: Optional[str] = None) -> Tuple[Path, str]:
    """Unpack an export archive into ``uploads_dir`` and return (export_root, export_id).

    A previous extraction of the same export is replaced, but only once the
    new archive has been checked and fully unpacked. Members whose paths
    would land outside the target directory are rejected.
    """
    zip_path = Path(zip_path)
    ident = export_id or export_id_from_name(zip_path.name)
    uploads_dir = Path(uploads_dir)
    target = uploads_dir / f"{EXPORT_DIR_PREFIX}{ident}"
    root = target.resolve()

    with zipfile.ZipFile(zip_path) as zf:
        for member in zf.infolist():
            dest = (root / member.filename).resolve()
            if root != dest and root not in dest.parents:
                raise ValueError(f"Archive member escapes export directory: {member.filename}")

        uploads_dir.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=".extract-", dir=uploads_dir))
        try:
            zf.extractall(staging)
        except Exception:
            shutil.rmtree(staging, ignore_errors=True)
            raise

    if target.exists():
        shutil.rmtree(target)
    staging.rename(target)

    logger.info(
        f"Extracted {zip_path.name} to {target}",
        extra={"step": "extract", "status": "ok", "export_id": ident},
    )
    return target, ident
