"""Line-level CSV handling for feeds that wrap records across physical lines.

The public stat feeds are not RFC 4180 clean: a free-text field such as a
player name occasionally contains a raw newline, which splits one logical
record over two physical lines. Rows are therefore rebuilt by field count
against the header before they are split into columns.

Columns are split naively on commas; quoted commas are not supported.
"""

from __future__ import annotations

import logging
import math
import re
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_INT_RE = re.compile(r"^[+-]?\d+$")


def split_physical_lines(payload: str) -> List[str]:
    """Split a payload on any newline variant (``\\n``, ``\\r\\n``, ``\\r``, ...)."""
    if not payload:
        return []
    return payload.splitlines()


def count_fields(line: str) -> int:
    return len(line.split(","))


def reassemble_rows(payload: str) -> Tuple[List[str], List[List[str]]]:
    """
    Rebuild logical rows from a raw CSV payload.

    Args:
        payload: Raw CSV text; the first physical line is the header

    Returns:
        Tuple of (header_fields, rows). Each row is a list of trimmed fields
        with at least as many entries as the header. Rows that are still
        short when the input runs out are dropped.
    """
    lines = split_physical_lines(payload)
    if len(lines) < 2:
        return [], []

    header = [h.strip() for h in lines[0].split(",")]
    expected_columns = len(header)

    rows: List[List[str]] = []
    index = 1
    while index < len(lines):
        line = lines[index].strip()
        if not line:
            index += 1
            continue

        start = index
        column_count = count_fields(line)
        while column_count < expected_columns and index + 1 < len(lines):
            index += 1
            following = lines[index].strip()
            if not following:
                continue
            line = f"{line} {following}"
            column_count = count_fields(line)

        if column_count >= expected_columns:
            rows.append([col.strip() for col in line.split(",")])
        else:
            logger.debug(
                "Dropping short row at line %d (%d of %d columns)",
                start + 1,
                column_count,
                expected_columns,
            )
        index += 1

    return header, rows


def parse_number(raw: Optional[str]) -> Optional[float]:
    """
    Parse a stat cell, tolerating ``%`` suffixes and thousands separators.

    Examples::

        >>> parse_number("12.5%")
        12.5
        >>> parse_number("1,234")
        1234.0
        >>> parse_number("KC") is None
        True
    """
    if raw is None:
        return None
    cleaned = str(raw).strip().replace("%", "").replace(",", "")
    if not _NUMBER_RE.match(cleaned):
        return None
    value = float(cleaned)
    if not math.isfinite(value):
        return None
    return value


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse a plain integer cell; anything else (``"12.0"``, ``""``) is unknown."""
    if raw is None:
        return None
    cleaned = str(raw).strip()
    if not _INT_RE.match(cleaned):
        return None
    return int(cleaned)


def parse_float(raw: Optional[str]) -> Optional[float]:
    """Parse a plain decimal cell without any cleaning."""
    if raw is None:
        return None
    cleaned = str(raw).strip()
    if not _NUMBER_RE.match(cleaned):
        return None
    value = float(cleaned)
    return value if math.isfinite(value) else None
