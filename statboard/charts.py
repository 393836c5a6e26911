from __future__ import annotations

from typing import Any, Dict, Sequence

import altair as alt
import pandas as pd

from statboard.stats import SectionStats

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def section_bar_chart(section_stats: Sequence[SectionStats]) -> alt.Chart | None:
    """Stacked Good/Bad counts per section; ``None`` when nothing was classified."""
    data = [x for x in section_stats if x.total > 0]
    if not data:
        return None
    long_df = pd.DataFrame(
        [{"section": x.section.title, "result": "Good", "count": x.good} for x in data]
        + [{"section": x.section.title, "result": "Bad", "count": x.bad} for x in data]
    )
    return (
        alt.Chart(long_df)
        .mark_bar()
        .encode(
            y=alt.Y("section:N", title="Section", sort="-x"),
            x=alt.X("count:Q", title="Rows", stack="zero"),
            color=alt.Color(
                "result:N",
                title="Result",
                scale=alt.Scale(domain=["Good", "Bad"], range=["#16a34a", "#dc2626"]),
            ),
            tooltip=["section", "result", alt.Tooltip("count:Q", format=",")],
        )
    )
