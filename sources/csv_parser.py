from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from sources.base import HeaderLocator, ParseResult, RecordSchema


logger = logging.getLogger(__name__)


def header_prefix_locator(prefix: str) -> HeaderLocator:
    """Build a locator that skips everything before the first line starting with ``prefix``."""

    def _locate(text: str) -> Optional[str]:
        # Split on "\n" only; cell text may hold other Unicode line separators
        offset = 0
        for line in text.split("\n"):
            if line.strip().lstrip("\ufeff").startswith(prefix):
                return text[offset:]
            offset += len(line) + 1
        return None

    return _locate


def _clean_header(name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    return name.lstrip("\ufeff").strip()


def _row_to_fields(row: Dict[Optional[str], object]) -> Dict[str, Optional[str]]:
    # Cells beyond the header land under the None key; short rows give None values.
    fields: Dict[str, Optional[str]] = {}
    for key, value in row.items():
        if not isinstance(key, str) or not key:
            continue
        fields[key] = value if isinstance(value, str) else None
    return fields


def parse_records(text: Optional[str], schema: RecordSchema) -> ParseResult:
    """Turn raw CSV text into records for ``schema``.

    Malformed rows become partial records. Duplicate header names keep the
    last column's value. A schema with ``locate_header`` only parses from the
    located header onward; with ``is_valid`` rows failing it are discarded.
    """
    diagnostics: List[str] = []
    if not text or not text.strip():
        return ParseResult(kind=schema.kind, source_present=text is not None)

    if schema.locate_header is not None:
        located = schema.locate_header(text)
        if located is None:
            diagnostics.append("header-not-found")
            logger.warning(
                "Could not find header row",
                extra={"step": "parse", "kind": schema.kind, "status": "header-not-found"},
            )
            return ParseResult(kind=schema.kind, diagnostics=diagnostics, source_present=True)
        text = located

    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames:
        reader.fieldnames = [_clean_header(n) for n in reader.fieldnames]

    records = []
    rows_read = 0
    dropped = 0
    malformed = 0
    try:
        for row in reader:
            # DictReader already skips fully empty lines; drop whitespace-only rows too
            if not any(isinstance(v, str) and v.strip() for v in row.values()):
                continue
            rows_read += 1
            if None in row or any(v is None for v in row.values()):
                malformed += 1
            try:
                record = schema.model.model_validate(_row_to_fields(row))
            except ValidationError as e:
                dropped += 1
                diagnostics.append(f"row {rows_read}: {e.error_count()} invalid field(s)")
                continue
            if schema.is_valid is not None and not schema.is_valid(record):
                dropped += 1
                continue
            records.append(record)
    except csv.Error as e:
        diagnostics.append(f"csv-error: {e}")
        logger.warning(
            "CSV parsing stopped early",
            extra={"step": "parse", "kind": schema.kind, "status": "csv-error", "error": str(e)},
        )

    if malformed:
        diagnostics.append(f"{malformed} row(s) with mismatched column count")
    if dropped:
        diagnostics.append(f"{dropped} non-data row(s) discarded")
        logger.warning(
            f"Discarded {dropped} non-data {schema.kind} row(s)",
            extra={"step": "parse", "kind": schema.kind, "status": "discarded", "count": dropped},
        )
    return ParseResult(
        kind=schema.kind,
        records=tuple(records),
        diagnostics=diagnostics,
        rows_read=rows_read,
        rows_dropped=dropped,
        source_present=True,
    )


def source_path(root: Path, schema: RecordSchema) -> Path:
    return Path(root) / schema.file_path


def read_source(root: Optional[Path], schema: RecordSchema) -> ParseResult:
    """Read and parse one kind's file; a missing file yields an empty result."""
    if root is None:
        return ParseResult(kind=schema.kind, diagnostics=["source-absent"])
    path = source_path(root, schema)
    if not path.is_file():
        logger.warning(
            f"File not found: {path}",
            extra={"step": "parse", "kind": schema.kind, "status": "source-absent"},
        )
        return ParseResult(kind=schema.kind, diagnostics=["source-absent"])
    text = path.read_text(encoding="utf-8-sig", errors="replace")
    result = parse_records(text, schema)
    logger.info(
        f"Parsed {len(result.records)} {schema.kind} from {schema.file_path}",
        extra={"step": "parse", "kind": schema.kind, "status": "ok", "count": len(result.records)},
    )
    return result
