"""
Report rendering for sequence collision scans.

Text layout:

    Matches:
    sequence: nextval('a_id_seq'::regclass))<TAB>tableName: a;<TAB>columnName: id;
    sequence: nextval('a_id_seq'::regclass))<TAB>tableName: b;<TAB>columnName: id;

    sequence: nextval('c_id_seq'::regclass))<TAB>tableName: c;<TAB>columnName: id;
    ...

    Total:3

A blank line separates an entry from the previous one when their
default expressions differ. The total counts entries, not sequences.
"""

from typing import List, Iterable

from .protocol.binding import ColumnBinding, ScanResult


REPORT_HEADER = "Matches:"


def format_match(binding: ColumnBinding) -> str:
    """One report line for a colliding column."""
    return (
        f"sequence: {binding.column_default})\t"
        f"tableName: {binding.table_name};\t"
        f"columnName: {binding.column_name};"
    )


def render_matches(matches: Iterable[ColumnBinding]) -> List[str]:
    """Header plus one line per binding, blank line on each default change."""
    lines = [REPORT_HEADER]
    last_default = None

    for binding in matches:
        if last_default is not None and binding.column_default != last_default:
            lines.append("")
        lines.append(format_match(binding))
        last_default = binding.column_default

    return lines


def no_repeats_message(schema: str) -> str:
    return f"No repeats found for {schema} schema"


def render_report(result: ScanResult) -> str:
    """
    Render a scan result as text.

    Returns the no-repeats message when nothing collided.
    """
    if result.is_empty:
        return no_repeats_message(result.schema)

    lines = render_matches(result.matches)
    lines.append("")
    lines.append(f"Total:{result.total}")
    return "\n".join(lines)


def render_json(result: ScanResult, indent: int = 2) -> str:
    """Render a scan result as JSON."""
    return result.to_json(indent=indent)
