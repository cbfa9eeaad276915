"""Tests for the valve description parser."""

import pytest

from valveflow.core.errors import ParseError
from valveflow.core.parser import parse_line, parse_lines, parse_text


def test_plural_phrasing():
    record = parse_line("Valve AA has flow rate=0; tunnels lead to valves DD, II, BB")
    assert record == ("AA", 0, ["DD", "II", "BB"])


def test_singular_phrasing():
    record = parse_line("Valve HH has flow rate=22; tunnel leads to valve GG")
    assert record == ("HH", 22, ["GG"])


def test_trailing_newline_is_ignored():
    record = parse_line("Valve JJ has flow rate=21; tunnel leads to valve II\n")
    assert record == ("JJ", 21, ["II"])


def test_blank_lines_skipped(sample_lines):
    records = parse_lines(["", *sample_lines, "   "])
    assert len(records) == 10
    assert records[0][0] == "AA"


def test_parse_text():
    records = parse_text(
        "Valve AA has flow rate=0; tunnel leads to valve BB\n"
        "Valve BB has flow rate=7; tunnel leads to valve AA\n"
    )
    assert records == [("AA", 0, ["BB"]), ("BB", 7, ["AA"])]


def test_malformed_line_reports_line_number():
    lines = [
        "Valve AA has flow rate=0; tunnel leads to valve BB",
        "Valve BB has flow rate=-3; tunnel leads to valve AA",
    ]
    with pytest.raises(ParseError) as excinfo:
        parse_lines(lines)
    assert excinfo.value.context["line_number"] == 2
    assert "Line 2" in str(excinfo.value)


@pytest.mark.parametrize(
    "line",
    [
        "Valve A has flow rate=0; tunnel leads to valve BB",
        "Valve AA has flow rate=x; tunnel leads to valve BB",
        "Valve AA has flow rate=0; tunnels lead to valves BB,CC",
        "Valve AA has flow rate=0; tunnels lead to valves ",
    ],
)
def test_rejected_lines(line):
    with pytest.raises(ParseError):
        parse_line(line)
