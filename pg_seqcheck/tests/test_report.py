import json

from pg_seqcheck.protocol.binding import ColumnBinding, ScanResult
from pg_seqcheck.report import (
    format_match,
    render_matches,
    render_report,
    render_json,
    no_repeats_message,
)

USERS_SEQ = "nextval('users_id_seq'::regclass)"
ORDERS_SEQ = "nextval('orders_id_seq'::regclass)"


def _result(schema, *groups):
    result = ScanResult(schema=schema)
    for group in groups:
        result.add_group(group)
    return result


def test_format_match_line():
    line = format_match(ColumnBinding("users", "id", USERS_SEQ))
    assert line == (
        "sequence: nextval('users_id_seq'::regclass))\ttableName: users;\tcolumnName: id;"
    )


def test_empty_result_renders_no_repeats_message():
    assert render_report(ScanResult(schema="public")) == "No repeats found for public schema"
    assert no_repeats_message("billing") == "No repeats found for billing schema"


def test_single_group_report():
    result = _result("public", [
        ColumnBinding("users", "id", USERS_SEQ),
        ColumnBinding("accounts", "id", USERS_SEQ),
    ])
    assert render_report(result) == "\n".join([
        "Matches:",
        f"sequence: {USERS_SEQ})\ttableName: users;\tcolumnName: id;",
        f"sequence: {USERS_SEQ})\ttableName: accounts;\tcolumnName: id;",
        "",
        "Total:2",
    ])


def test_blank_line_between_different_defaults():
    result = _result(
        "public",
        [ColumnBinding("users", "id", USERS_SEQ), ColumnBinding("accounts", "id", USERS_SEQ)],
        [ColumnBinding("orders", "id", ORDERS_SEQ), ColumnBinding("carts", "id", ORDERS_SEQ)],
    )
    lines = render_report(result).split("\n")
    assert lines[0] == "Matches:"
    assert lines[3] == ""
    assert lines[4].startswith(f"sequence: {ORDERS_SEQ})")
    assert lines[-1] == "Total:4"


def test_repeated_group_with_same_default_has_no_separator():
    group = [ColumnBinding("users", "id", USERS_SEQ), ColumnBinding("accounts", "id", USERS_SEQ)]
    lines = render_matches(group + group)
    assert "" not in lines
    assert len(lines) == 5


def test_separator_compares_previous_entry_only():
    a = ColumnBinding("users", "id", USERS_SEQ)
    b = ColumnBinding("orders", "id", ORDERS_SEQ)
    lines = render_matches([a, b, a])
    assert lines == ["Matches:", format_match(a), "", format_match(b), "", format_match(a)]


def test_total_counts_entries_not_sequences():
    group = [ColumnBinding(t, "id", USERS_SEQ) for t in ("a", "b", "c")]
    result = _result("shop", group, group, group)
    assert render_report(result).endswith("\nTotal:9")


def test_rendering_is_deterministic():
    group = [ColumnBinding("users", "id", USERS_SEQ), ColumnBinding("accounts", "id", USERS_SEQ)]
    first = render_report(_result("public", group))
    second = render_report(_result("public", list(group)))
    assert first == second
    assert not first.startswith("\n")
    assert not first.endswith("\n")


def test_empty_groups_are_not_recorded():
    result = _result("public", [], [ColumnBinding("users", "id", USERS_SEQ)], [])
    assert len(result.groups) == 1
    assert result.total == 1


def test_render_json():
    group = [ColumnBinding("users", "id", USERS_SEQ), ColumnBinding("accounts", "id", USERS_SEQ)]
    data = json.loads(render_json(_result("public", group)))
    assert data == {
        "schema": "public",
        "total": 2,
        "groups": [[
            {"table_name": "users", "column_name": "id", "column_default": USERS_SEQ},
            {"table_name": "accounts", "column_name": "id", "column_default": USERS_SEQ},
        ]],
    }


def test_render_json_empty():
    data = json.loads(render_json(ScanResult(schema="public")))
    assert data == {"schema": "public", "total": 0, "groups": []}
