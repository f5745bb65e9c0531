from __future__ import annotations

import sqlite3

import pytest

from pipelines.ingest_export import ingest_export, load_snapshot
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import AggregateStats, EmptyExportError, LocateSources, ParseSources
from services.dashboard import filter_choices, full_stats, recompute_view
from services.filtering import predicate_from_selection
from sources.csv_parser import read_source


def test_full_export_ingests_every_kind(export_dir):
    ctx = ingest_export(export_dir, export_id="12-24-2025")
    assert ctx.missing_kinds == []
    assert ctx.meta["record_counts"] == {
        "invitations": 4,
        "jobs": 5,
        "messages": 4,
        "richMedia": 4,
        "connections": 4,
    }
    assert ctx.bundle.export_id == "12-24-2025"
    assert ctx.stats == full_stats(ctx.bundle)


def test_partial_export_still_succeeds(make_export):
    root = make_export(["messages"])
    ctx = ingest_export(root)
    wire = ctx.stats.to_wire()
    assert wire["messages"]["total"] > 0
    for kind in ("invitations", "jobs", "richMedia", "connections"):
        assert wire[kind]["total"] == 0
    assert set(ctx.missing_kinds) == {"invitations", "jobs", "richMedia", "connections"}
    assert "source-absent" in ctx.diagnostics()["connections"]


def test_empty_export_is_a_structural_failure(tmp_path):
    with pytest.raises(EmptyExportError) as exc:
        ingest_export(tmp_path)
    assert "re-upload" in str(exc.value)


def test_one_failing_kind_does_not_block_the_others(export_dir, monkeypatch):
    import pipelines.steps.parse_sources as parse_mod

    def flaky(root, schema):
        if schema.kind == "jobs":
            raise OSError("disk on fire")
        return read_source(root, schema)

    monkeypatch.setattr(parse_mod, "read_source", flaky)
    ctx = ingest_export(export_dir)
    assert ctx.bundle.jobs == ()
    assert ctx.stats.jobs.total == 0
    assert ctx.stats.connections.total == 4
    assert any(d.startswith("load-failed") for d in ctx.diagnostics()["jobs"])


def test_snapshot_rehydration_yields_identical_stats(export_dir):
    conn = sqlite3.connect(":memory:")
    fresh = ingest_export(export_dir, export_id="12-24-2025", conn=conn)
    assert fresh.meta["snapshot_saved"] is True

    loaded = load_snapshot(conn)
    assert loaded.export_id == "12-24-2025"
    assert loaded.stats.to_wire() == fresh.stats.to_wire()
    assert loaded.bundle == fresh.bundle
    conn.close()


def test_load_snapshot_without_store_raises():
    conn = sqlite3.connect(":memory:")
    with pytest.raises(LookupError):
        load_snapshot(conn)
    conn.close()


def test_aggregate_needs_a_bundle():
    with pytest.raises(RuntimeError):
        Pipeline([AggregateStats()]).run(RunContext())


def test_steps_compose_manually(export_dir):
    ctx = Pipeline([LocateSources(), ParseSources(max_workers=1), AggregateStats(top_n=1)]).run(
        RunContext(export_root=export_dir)
    )
    assert [c.name for c in ctx.stats.connections.top_companies] == ["Acme"]


def test_recompute_view_matches_filtered_subset(export_dir):
    bundle = ingest_export(export_dir).bundle
    pred = predicate_from_selection("connections", {"company": "Acme"})
    view = recompute_view(bundle, "connections", pred)
    assert [r.first_name for r in view.records] == ["Bob", "Dan"]
    assert view.stats.total == 2
    assert view.stats.with_email == 1
    assert [(c.name, c.value) for c in view.top_companies] == [("Acme", 2)]
    wire = view.to_wire()
    assert wire["total"] == 2
    assert [p["key"] for p in wire["monthly"]] == ["2024-01", "2024-03"]


def test_recompute_view_without_predicate_equals_full_stats(export_dir):
    bundle = ingest_export(export_dir).bundle
    stats = full_stats(bundle)
    view = recompute_view(bundle, "invitations")
    assert view.stats == stats.invitations
    assert view.top_companies == []
    assert {c.name for c in view.breakdown} == {"OUTGOING", "INCOMING"}


def test_filter_choices(export_dir):
    bundle = ingest_export(export_dir).bundle
    assert filter_choices(bundle, "jobs") == {"company": ["Acme", "Globex", "Initech"]}
    conns = filter_choices(bundle, "connections", connection_limit=1)
    assert conns["company"] == ["Unknown", "Acme"]
    assert conns["position"] == ["Unknown", "Engineer"]
    assert filter_choices(bundle, "messages") == {}
