import argparse
import json
import sys
import zipfile
from pathlib import Path

from config.settings import get_settings
from db.connection import get_connection
from db import schema
from db.repos.snapshot_repo import SnapshotRepo
from pipelines.ingest_export import ingest_export, load_snapshot
from pipelines.steps import EmptyExportError
from services.dashboard import TABLE_COLUMNS, filter_choices, recompute_view
from services.filtering import parse_selection_args, predicate_from_selection
from services.reporting import print_summary, print_view
from services.table_view import paginate, search, sort_records, to_csv
from sources.archive import export_id_from_name, extract_archive
from sources.linkedin_export import ALL_KINDS
from utils.date_parsing import parse_bound
from utils.logging_setup import init_logging


def _ingest(args, conn=None):
    settings = get_settings()
    if args.input:
        source = Path(args.input)
    else:
        source = settings.export_root()
        if source is None:
            raise SystemExit("Error: no --input given and neither DATA_DIR nor CURRENT_EXPORT is set")
    if source.suffix.lower() == ".zip":
        try:
            root, export_id = extract_archive(source, Path(settings.uploads_dir), args.export_id)
        except (ValueError, zipfile.BadZipFile) as e:
            raise SystemExit(f"Error: could not unpack {source.name}: {e}")
    else:
        root = source
        export_id = args.export_id or settings.current_export or export_id_from_name(source.name)
    try:
        return ingest_export(
            root,
            export_id=export_id,
            conn=conn,
            max_workers=settings.parse_concurrency,
            top_n=settings.top_n,
        )
    except EmptyExportError as e:
        raise SystemExit(f"Error: {e}")


def cmd_ingest(args):
    conn = get_connection(args.db) if args.save else None
    try:
        ctx = _ingest(args, conn)
    finally:
        if conn is not None:
            conn.close()
    if args.json:
        print(json.dumps(ctx.stats.to_wire(), indent=2, ensure_ascii=False))
        return
    print_summary(ctx.stats, ctx.export_id, ctx.missing_kinds, ctx.diagnostics())
    if args.save:
        print(f"Snapshot stored in {args.db}")


def cmd_stats(args):
    conn = get_connection(args.db)
    try:
        ctx = load_snapshot(conn, top_n=get_settings().top_n)
    except LookupError as e:
        raise SystemExit(f"Error: {e}")
    finally:
        conn.close()
    if args.json:
        print(json.dumps(ctx.stats.to_wire(), indent=2, ensure_ascii=False))
        return
    print_summary(ctx.stats, ctx.export_id)


def cmd_view(args):
    settings = get_settings()
    if args.input:
        bundle = _ingest(args).bundle
    else:
        conn = get_connection(args.db)
        try:
            bundle = load_snapshot(conn).bundle
        except LookupError as e:
            raise SystemExit(f"Error: {e}")
        finally:
            conn.close()

    try:
        predicate = predicate_from_selection(
            args.kind,
            parse_selection_args(args.filter),
            start=parse_bound(args.start),
            end=parse_bound(args.end, end_of_day=True),
        )
    except ValueError as e:
        raise SystemExit(f"Error: {e}")

    view = recompute_view(bundle, args.kind, predicate, top_n=settings.top_n)
    columns = list(TABLE_COLUMNS[args.kind])
    rows = search(view.records, args.search, columns)
    if args.sort:
        rows = sort_records(rows, args.sort, descending=args.desc)

    if args.csv:
        sys.stdout.write(to_csv(rows, columns))
        return
    if args.json:
        out = view.to_wire()
        out["rows"] = [rec.to_row() for rec in rows]
        out["options"] = filter_choices(
            bundle, args.kind, settings.job_company_options, settings.connection_options
        )
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return
    page = paginate(rows, args.page, args.page_size or settings.page_size)
    print_view(view, page, columns)


def cmd_clear(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
        repo = SnapshotRepo(conn)
        export_id = repo.stored_export_id()
        removed = repo.clear()
    finally:
        conn.close()
    if export_id:
        print(f"Removed stored export {export_id}")
    print(f"Removed {removed} stored snapshot(s)")


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="LinkedIn export insights CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite snapshot store (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_ing = sub.add_parser("ingest", help="Parse an export directory or .zip and print its stats")
    p_ing.add_argument("--input", "-i", help="Export directory or .zip archive (default: DATA_DIR / CURRENT_EXPORT)")
    p_ing.add_argument("--export-id", help="Export identifier (default: date in the export name)")
    p_ing.add_argument("--save", action="store_true", help="Store the parsed records as the current snapshot")
    p_ing.add_argument("--json", action="store_true", help="Print the stats object as JSON")
    p_ing.set_defaults(func=cmd_ingest)

    p_st = sub.add_parser("stats", help="Show stats of the stored snapshot")
    p_st.add_argument("--json", action="store_true", help="Print the stats object as JSON")
    p_st.set_defaults(func=cmd_stats)

    p_vw = sub.add_parser("view", help="Filter, search, sort and page one record kind")
    p_vw.add_argument("kind", choices=list(ALL_KINDS))
    p_vw.add_argument("--input", "-i", help="Read this export instead of the stored snapshot")
    p_vw.add_argument("--export-id", help="Export identifier when reading --input")
    p_vw.add_argument("--filter", "-f", action="append", default=[], help="Dashboard filter key=value (repeatable)")
    p_vw.add_argument("--start", help="Start date (inclusive), e.g. 2024-01-01")
    p_vw.add_argument("--end", help="End date (inclusive), e.g. 2024-12-31")
    p_vw.add_argument("--search", "-q", help="Case-insensitive search across table columns")
    p_vw.add_argument("--sort", help="Column to sort by")
    p_vw.add_argument("--desc", action="store_true", help="Sort descending")
    p_vw.add_argument("--page", type=int, default=1)
    p_vw.add_argument("--page-size", type=int, default=None)
    p_vw.add_argument("--csv", action="store_true", help="Write matching rows as CSV")
    p_vw.add_argument("--json", action="store_true", help="Print view stats and rows as JSON")
    p_vw.set_defaults(func=cmd_view)

    p_clr = sub.add_parser("clear", help="Remove the stored snapshot")
    p_clr.set_defaults(func=cmd_clear)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
