"""
Parser for valve description lines:

    Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
    Valve HH has flow rate=22; tunnel leads to valve GG

Singular and plural phrasing produce the same record shape.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from valveflow.core.errors import ParseError

logger = logging.getLogger(__name__)

ValveRecord = tuple[str, int, list[str]]

LINE_REGEX = re.compile(
    r"^Valve ([A-Z]{2}) has flow rate=([0-9]+); "
    r"(?:tunnels lead to valves|tunnel leads to valve) "
    r"([A-Z]{2}(?:, [A-Z]{2})*)$"
)


def parse_line(line: str, line_number: int = 1) -> ValveRecord:
    """Parse one description line into ``(valve_id, flow_rate, neighbours)``."""
    match = LINE_REGEX.match(line.strip())
    if match is None:
        raise ParseError(
            f"Line {line_number}: malformed valve description {line.strip()!r}",
            context={"line_number": line_number},
        )
    valve_id, flow_str, neighbours_str = match.groups()
    return valve_id, int(flow_str), neighbours_str.split(", ")


def parse_lines(lines: Iterable[str]) -> list[ValveRecord]:
    """Parse every non-blank line. Raises ParseError on the first bad line."""
    records = [
        parse_line(line, i)
        for i, line in enumerate(lines, start=1)
        if line.strip()
    ]
    logger.debug("Parsed %d valve records", len(records))
    return records


def parse_text(text: str) -> list[ValveRecord]:
    return parse_lines(text.splitlines())
