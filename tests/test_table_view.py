from __future__ import annotations

from models.records import Connection, JobPosting
from services.table_view import filter_options, paginate, search, sort_records, to_csv


PEOPLE = [
    Connection(first_name="Carol", last_name="Jones", company="Globex"),
    Connection(first_name="alice", last_name="Adams", company="Acme"),
    Connection(first_name="Bob", last_name="Builder"),
    Connection(first_name="Dan", last_name="Smith", company="Acme"),
]


def test_search_is_case_insensitive_across_columns():
    hits = search(PEOPLE, "ACME", ["First Name", "Company"])
    assert [p.first_name for p in hits] == ["alice", "Dan"]
    assert search(PEOPLE, "  ", ["Company"]) == tuple(PEOPLE)
    assert search(PEOPLE, "zzz", ["Company"]) == ()


def test_sort_is_stable_and_puts_empty_values_last():
    asc = sort_records(PEOPLE, "Company")
    assert [p.first_name for p in asc] == ["alice", "Dan", "Carol", "Bob"]
    desc = sort_records(PEOPLE, "Company", descending=True)
    assert [p.first_name for p in desc] == ["Carol", "alice", "Dan", "Bob"]


def test_paginate_clamps_out_of_range_pages():
    records = [JobPosting(title=f"T{i}") for i in range(23)]
    page = paginate(records, page=3, page_size=10)
    assert (page.page, page.total_pages, page.total_items) == (3, 3, 23)
    assert len(page.items) == 3

    assert paginate(records, page=99, page_size=10).page == 3
    assert paginate(records, page=0, page_size=10).page == 1

    empty = paginate([], page=5)
    assert empty.items == () and empty.total_pages == 0 and empty.page == 1


def test_filter_options_are_distinct_first_seen_and_limited():
    assert filter_options(PEOPLE, "Company") == ["Globex", "Acme"]
    assert filter_options(PEOPLE, "Company", limit=1) == ["Globex"]


def test_to_csv_quotes_cells_and_blanks_missing_values():
    rows = [
        JobPosting(company_name="Acme, Inc.", title="Engineer"),
        JobPosting(title="Analyst"),
    ]
    text = to_csv(rows, ["Company Name", "Title"])
    assert text == 'Company Name,Title\n"Acme, Inc.",Engineer\n,Analyst\n'
