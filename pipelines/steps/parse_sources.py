from __future__ import annotations

import logging
from typing import Dict

from models.bundle import ExportBundle
from pipelines.runner import RunContext
from sources.base import ParseResult
from sources.csv_parser import read_source
from sources.linkedin_export import CONNECTIONS, INVITATIONS, JOBS, MESSAGES, RICH_MEDIA
from sources.registry import available_schemas


logger = logging.getLogger(__name__)


def bundle_from_results(results: Dict[str, ParseResult], export_id: str | None) -> ExportBundle:
    def _records(kind: str):
        res = results.get(kind)
        return res.records if res is not None else ()

    return ExportBundle(
        export_id=export_id,
        invitations=_records(INVITATIONS),
        jobs=_records(JOBS),
        messages=_records(MESSAGES),
        rich_media=_records(RICH_MEDIA),
        connections=_records(CONNECTIONS),
    )


class ParseSources:
    def __init__(self, max_workers: int = 5) -> None:
        self.max_workers = max(1, max_workers)

    def run(self, ctx: RunContext) -> RunContext:
        import concurrent.futures as _fut

        schemas = available_schemas()

        # Kinds are independent; one failing only empties its own collection
        def _parse(kind: str) -> ParseResult:
            try:
                return read_source(ctx.export_root, schemas[kind])
            except Exception as e:
                logger.error(
                    f"Could not load {kind}: {e}",
                    extra={"step": "parse", "kind": kind, "status": "failed", "error": type(e).__name__},
                )
                return ParseResult(kind=kind, diagnostics=[f"load-failed: {e}"])

        results: Dict[str, ParseResult] = {}
        with _fut.ThreadPoolExecutor(max_workers=self.max_workers) as ex:
            futures = {ex.submit(_parse, kind): kind for kind in schemas}
            for fut in _fut.as_completed(futures):
                results[futures[fut]] = fut.result()

        ctx.results = {kind: results[kind] for kind in schemas}
        ctx.bundle = bundle_from_results(ctx.results, ctx.export_id)
        ctx.meta["record_counts"] = ctx.bundle.counts()
        total = sum(ctx.meta["record_counts"].values())
        logger.info(
            f"Parsed {total} records across {len(schemas)} kinds",
            extra={"step": "parse", "status": "ok", "count": total, "export_id": ctx.export_id or "-"},
        )
        return ctx
