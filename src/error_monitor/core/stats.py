"""Bounded error statistics ledger and summary report."""

from __future__ import annotations

from collections import OrderedDict
from datetime import UTC, datetime

from .models import ErrorMatch, ErrorReport, FrequentError, StatsEntry

MOST_FREQUENT_LIMIT = 5


def stats_key(error_type: str, line: str) -> str:
    return f"{error_type}-{line}"


class ErrorStatsLedger:
    """Occurrence counts keyed by (type, matched line).

    Eviction is by insertion order, not recency: once the ledger holds more
    than ``max_entries`` keys, the key inserted first is dropped.
    """

    def __init__(self, max_entries: int) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, StatsEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, error_type: str, line: str) -> StatsEntry | None:
        return self._entries.get(stats_key(error_type, line))

    def record(self, match: ErrorMatch, *, now: datetime | None = None) -> StatsEntry:
        """Count one occurrence of ``match`` and evict the oldest key if over capacity."""
        now = now or datetime.now(UTC)
        key = stats_key(match.type, match.line)

        entry = self._entries.get(key)
        if entry is None:
            entry = StatsEntry(
                count=1,
                first_seen=now,
                last_seen=now,
                type=match.type,
                severity=match.severity,
            )
            self._entries[key] = entry
        else:
            entry.count += 1
            entry.last_seen = max(now, entry.first_seen)

        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return entry

    def report(self) -> ErrorReport:
        """Summarize totals by type/severity and the most frequent keys."""
        report = ErrorReport()
        for entry in self._entries.values():
            report.total_errors += entry.count
            report.errors_by_type[entry.type] = report.errors_by_type.get(entry.type, 0) + entry.count
            report.errors_by_severity[entry.severity] = (
                report.errors_by_severity.get(entry.severity, 0) + entry.count
            )

        # sorted() is stable, so ties keep insertion order
        top = sorted(self._entries.values(), key=lambda e: e.count, reverse=True)[:MOST_FREQUENT_LIMIT]
        report.most_frequent = [
            FrequentError(
                type=e.type,
                count=e.count,
                first_seen=e.first_seen,
                last_seen=e.last_seen,
            )
            for e in top
        ]
        return report
