from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import pandas as pd

from statboard.classify import ClassifiedRow
from statboard.sections import Section


@dataclass(frozen=True)
class SectionStats:
    section: Section
    rows: Tuple[ClassifiedRow, ...]
    good: int
    bad: int

    @property
    def total(self) -> int:
        return len(self.rows)

    @property
    def fraction_good(self) -> float:
        return self.good / self.total if self.total else 0.0

    def summary(self) -> Dict[str, Any]:
        return {
            "key": self.section.key,
            "title": self.section.title,
            "column": self.section.column,
            "rows": self.total,
            "good": self.good,
            "bad": self.bad,
            "fraction_good": self.fraction_good,
        }


@dataclass(frozen=True)
class Totals:
    total_rows: int = 0
    total_good: int = 0
    total_bad: int = 0
    fraction_good: float = 0.0
    sections_with_data: int = 0
    sections_with_bad: int = 0


def summarize_section(section: Section, rows: Sequence[ClassifiedRow]) -> SectionStats:
    good = sum(1 for r in rows if r.is_good)
    return SectionStats(section=section, rows=tuple(rows), good=good, bad=len(rows) - good)


def compute_section_stats(
    classified: Mapping[str, Sequence[ClassifiedRow]],
    sections: Sequence[Section],
) -> List[SectionStats]:
    return [summarize_section(s, classified.get(s.key, ())) for s in sections]


def compute_totals(section_stats: Sequence[SectionStats]) -> Totals:
    total_rows = sum(x.total for x in section_stats)
    total_good = sum(x.good for x in section_stats)
    return Totals(
        total_rows=total_rows,
        total_good=total_good,
        total_bad=total_rows - total_good,
        fraction_good=(total_good / total_rows) if total_rows else 0.0,
        sections_with_data=sum(1 for x in section_stats if x.total > 0),
        sections_with_bad=sum(1 for x in section_stats if x.bad > 0),
    )


def stats_frame(section_stats: Sequence[SectionStats]) -> pd.DataFrame:
    columns = ["key", "title", "column", "rows", "good", "bad", "fraction_good"]
    if not section_stats:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([x.summary() for x in section_stats], columns=columns)
