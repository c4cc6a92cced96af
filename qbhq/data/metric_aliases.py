"""
Ranked alias table for defensive metrics.

The team stats feed is unversioned: the same logical metric shows up under
different header spellings across releases ("pass_yds_allowed",
"passing_yards", "Pass Yards", ...). There is no canonical dictionary, so each
logical metric carries an ordered list of substring patterns:

  pass_yards_allowed:     ["pass", "yd"] -> ["pass", "yard"] -> ["pass"]
  completion_pct_allowed: ["comp"] -> ["completion"] -> ["pct"]
  sacks:                  ["sack"]
  interceptions_forced:   ["int"] -> ["intercept"]
  pass_tds_allowed:       ["pass", "td"] -> ["pass", "tds"] -> ["pass", "touchdown"]

A header matches a pattern when its lower-cased name contains every
substring. Patterns are tried in rank order and, within a pattern, headers
are tried in feed order; the first hit wins.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

PASS_YARDS_ALLOWED = "pass_yards_allowed"
COMPLETION_PCT_ALLOWED = "completion_pct_allowed"
SACKS = "sacks"
INTERCEPTIONS_FORCED = "interceptions_forced"
PASS_TDS_ALLOWED = "pass_tds_allowed"

# ---------------------------------------------------------------------------
# Alias table: logical metric -> ranked substring patterns
# ---------------------------------------------------------------------------

DEFAULT_METRIC_ALIASES: Dict[str, List[Tuple[str, ...]]] = {
    PASS_YARDS_ALLOWED: [("pass", "yd"), ("pass", "yard"), ("pass",)],
    COMPLETION_PCT_ALLOWED: [("comp",), ("completion",), ("pct",)],
    SACKS: [("sack",)],
    INTERCEPTIONS_FORCED: [("int",), ("intercept",)],
    PASS_TDS_ALLOWED: [("pass", "td"), ("pass", "tds"), ("pass", "touchdown")],
}

METRIC_LABELS: Dict[str, str] = {
    PASS_YARDS_ALLOWED: "pass yards",
    COMPLETION_PCT_ALLOWED: "completion pct",
    SACKS: "sacks",
    INTERCEPTIONS_FORCED: "ints",
    PASS_TDS_ALLOWED: "pass TDs",
}


def normalize_patterns(metric: str, patterns: Sequence[Sequence[str]]) -> List[Tuple[str, ...]]:
    """
    Validate and lower-case the ranked patterns for one metric.

    Args:
        metric: Logical metric name, used in error messages
        patterns: Ranked patterns, each a list of substrings

    Returns:
        Patterns as lower-cased tuples

    Raises:
        ValueError: If there are no patterns, or a pattern is a bare string
            or has no substrings
    """
    if isinstance(patterns, str) or not patterns:
        raise ValueError(f"Metric '{metric}' needs a list of alias patterns")
    normalized = []
    for pattern in patterns:
        # A bare "sack" would otherwise match on its individual letters.
        if isinstance(pattern, str) or not pattern:
            raise ValueError(f"Alias pattern for '{metric}' must be a non-empty list of substrings, got {pattern!r}")
        normalized.append(tuple(str(part).lower() for part in pattern))
    return normalized


@dataclass
class MetricAliasTable:
    """Resolves logical metrics to concrete stat keys."""

    aliases: Dict[str, List[Tuple[str, ...]]] = field(
        default_factory=lambda: copy.deepcopy(DEFAULT_METRIC_ALIASES)
    )

    def __post_init__(self):
        self.aliases = {
            metric: normalize_patterns(metric, patterns) for metric, patterns in self.aliases.items()
        }

    @property
    def metrics(self) -> List[str]:
        return list(self.aliases.keys())

    def find_key(self, metric: str, keys: Iterable[str]) -> Optional[str]:
        """
        Locate the stat key for one logical metric.

        Args:
            metric: Logical metric name
            keys: Candidate stat keys, in feed order

        Returns:
            The first matching key, or None when no pattern matches
        """
        patterns = self.aliases.get(metric)
        if not patterns:
            return None

        candidates: Sequence[str] = list(keys)
        for pattern in patterns:
            for key in candidates:
                lower = key.lower()
                if all(part in lower for part in pattern):
                    return key
        return None

    def resolve(self, keys: Iterable[str]) -> Dict[str, str]:
        """Map every resolvable logical metric to its stat key."""
        candidates = list(keys)
        resolved: Dict[str, str] = {}
        for metric in self.aliases:
            key = self.find_key(metric, candidates)
            if key is not None:
                resolved[metric] = key
        return resolved

    @staticmethod
    def label(metric: str) -> str:
        return METRIC_LABELS.get(metric, metric.replace("_", " "))

    def to_dict(self) -> Dict[str, List[List[str]]]:
        return {metric: [list(p) for p in patterns] for metric, patterns in self.aliases.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, List[Sequence[str]]]) -> "MetricAliasTable":
        """
        Build a table, overriding the defaults for the metrics given.

        Example::

            MetricAliasTable.from_dict({"sacks": [["sack"], ["sk"]]})
        """
        aliases = copy.deepcopy(DEFAULT_METRIC_ALIASES)
        aliases.update(data)
        return cls(aliases=aliases)
