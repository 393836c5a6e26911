from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from statboard.classify import ClassifiedRow
from statboard.filters import (
    DashboardFilters,
    RowFilter,
    SectionScope,
    SortMode,
    apply_row_filter,
    effective_filter,
)
from statboard.sections import Section
from statboard.stats import SectionStats


@dataclass(frozen=True)
class SectionView:
    stats: SectionStats
    row_filter: RowFilter
    rows: Tuple[ClassifiedRow, ...]

    @property
    def shown_good(self) -> int:
        return sum(1 for r in self.rows if r.is_good)

    @property
    def shown_fraction_good(self) -> float:
        return self.shown_good / len(self.rows) if self.rows else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.stats.summary(),
            "row_filter": self.row_filter,
            "shown": len(self.rows),
            "shown_good": self.shown_good,
            "shown_fraction_good": self.shown_fraction_good,
            "table": [r.to_dict() for r in self.rows],
        }


def matches_query(section: Section, query: str) -> bool:
    q = (query or "").strip().lower()
    if not q:
        return True
    return q in section.title.lower() or q in section.column.lower() or q in section.key.lower()


def _title_key(x: SectionStats) -> Tuple[str, str]:
    return (x.section.title.casefold(), x.section.title)


def sort_sections(section_stats: Sequence[SectionStats], sort_mode: SortMode) -> List[SectionStats]:
    if sort_mode == "A_Z":
        return sorted(section_stats, key=_title_key)
    return sorted(section_stats, key=lambda x: (-x.bad, -x.total, _title_key(x)))


def select_sections(
    section_stats: Sequence[SectionStats],
    *,
    scope: SectionScope = "ALL",
    query: str = "",
    sort_mode: SortMode = "MOST_BAD",
) -> List[SectionStats]:
    selected = []
    for x in section_stats:
        if scope == "WITH_BAD" and x.bad == 0:
            continue
        if scope == "WITH_DATA" and x.total == 0:
            continue
        if not matches_query(x.section, query):
            continue
        selected.append(x)
    return sort_sections(selected, sort_mode)


def build_view(section_stats: Sequence[SectionStats], filters: DashboardFilters) -> List[SectionView]:
    visible = select_sections(
        section_stats,
        scope=filters.scope,
        query=filters.query,
        sort_mode=filters.sort_mode,
    )
    out = []
    for x in visible:
        row_filter = effective_filter(filters.global_filter, filters.local_filter(x.section.key))
        out.append(SectionView(stats=x, row_filter=row_filter, rows=tuple(apply_row_filter(x.rows, row_filter))))
    return out
