from __future__ import annotations

import logging
from typing import List

from pipelines.runner import RunContext
from sources.csv_parser import source_path
from sources.registry import available_schemas


logger = logging.getLogger(__name__)


class EmptyExportError(RuntimeError):
    """The export holds none of the expected CSV files."""


class LocateSources:
    def run(self, ctx: RunContext) -> RunContext:
        present: List[str] = []
        missing: List[str] = []
        root = ctx.export_root
        for kind, schema in available_schemas().items():
            if root is not None and source_path(root, schema).is_file():
                present.append(kind)
            else:
                missing.append(kind)

        if not present:
            raise EmptyExportError(
                "No valid CSV files found in the export. Please re-upload a LinkedIn "
                "data export that contains at least one of: "
                + ", ".join(s.file_path for s in available_schemas().values())
            )
        if missing:
            files = ", ".join(available_schemas()[k].file_path for k in missing)
            logger.warning(
                f"Some optional files are missing: {files}. Continuing with available files.",
                extra={"step": "locate", "status": "partial", "export_id": ctx.export_id or "-"},
            )
        ctx.present_kinds = present
        ctx.missing_kinds = missing
        return ctx
