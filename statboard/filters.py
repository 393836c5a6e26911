from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Optional, Sequence

from statboard.classify import ClassifiedRow


RowFilter = Literal["ALL", "GOOD", "BAD"]
SectionScope = Literal["ALL", "WITH_BAD", "WITH_DATA"]
SortMode = Literal["MOST_BAD", "A_Z"]

ROW_FILTERS = ("ALL", "GOOD", "BAD")
SECTION_SCOPES = ("ALL", "WITH_BAD", "WITH_DATA")
SORT_MODES = ("MOST_BAD", "A_Z")


@dataclass(frozen=True)
class DashboardFilters:
    global_filter: RowFilter = "ALL"
    section_filters: Dict[str, RowFilter] = field(default_factory=dict)
    scope: SectionScope = "ALL"
    query: str = ""
    sort_mode: SortMode = "MOST_BAD"

    def local_filter(self, section_key: str) -> RowFilter:
        return self.section_filters.get(section_key, "ALL")


def _choice(value: object, allowed: Sequence[str], default: str) -> str:
    if value is None:
        return default
    s = str(value).strip().upper()
    return s if s in allowed else default


def normalize_filters(raw: dict, *, section_keys: Optional[Iterable[str]] = None) -> DashboardFilters:
    raw = raw or {}
    known = set(section_keys) if section_keys is not None else None

    section_filters: Dict[str, RowFilter] = {}
    for key, value in (raw.get("section_filters") or {}).items():
        key = str(key)
        if known is not None and key not in known:
            continue
        section_filters[key] = _choice(value, ROW_FILTERS, "ALL")  # type: ignore[assignment]

    return DashboardFilters(
        global_filter=_choice(raw.get("global_filter"), ROW_FILTERS, "ALL"),  # type: ignore[arg-type]
        section_filters=section_filters,
        scope=_choice(raw.get("scope"), SECTION_SCOPES, "ALL"),  # type: ignore[arg-type]
        query=str(raw.get("query") or "").strip(),
        sort_mode=_choice(raw.get("sort_mode"), SORT_MODES, "MOST_BAD"),  # type: ignore[arg-type]
    )


def effective_filter(global_filter: RowFilter, local_filter: RowFilter) -> RowFilter:
    """The global filter overrides every section's own filter unless it is "ALL"."""
    return local_filter if global_filter == "ALL" else global_filter


def apply_row_filter(rows: Sequence[ClassifiedRow], row_filter: RowFilter) -> List[ClassifiedRow]:
    if row_filter == "GOOD":
        return [r for r in rows if r.is_good]
    if row_filter == "BAD":
        return [r for r in rows if not r.is_good]
    return list(rows)
