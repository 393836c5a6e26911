from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Mapping, Optional, Sequence

from statboard.charts import section_bar_chart, to_vega_spec
from statboard.classify import classify_rows
from statboard.filters import DashboardFilters
from statboard.sections import Section, get_sections
from statboard.stats import compute_section_stats, compute_totals
from statboard.view import build_view


def compute_dashboard(
    rows: Sequence[Mapping[str, Any]],
    sections: Optional[Sequence[Section]] = None,
    filters: Optional[DashboardFilters] = None,
) -> Dict[str, Any]:
    sections = get_sections() if sections is None else sections
    filters = filters or DashboardFilters()

    classified = classify_rows(rows, sections)
    section_stats = compute_section_stats(classified, sections)
    totals = compute_totals(section_stats)
    view = build_view(section_stats, filters)

    charts: Dict[str, Any] = {}
    chart = section_bar_chart(section_stats)
    if chart is not None:
        charts["section_results"] = to_vega_spec(chart)

    return {
        "filters": asdict(filters),
        "row_count": len(rows),
        "totals": asdict(totals),
        "sections": [v.to_dict() for v in view],
        "charts": charts,
    }
