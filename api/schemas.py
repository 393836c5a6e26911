from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field


class DashboardFiltersModel(BaseModel):
    global_filter: Literal["ALL", "GOOD", "BAD"] = "ALL"
    section_filters: Dict[str, Literal["ALL", "GOOD", "BAD"]] = Field(default_factory=dict)
    scope: Literal["ALL", "WITH_BAD", "WITH_DATA"] = "ALL"
    query: str = ""
    sort_mode: Literal["MOST_BAD", "A_Z"] = "MOST_BAD"


class RowsRequest(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)


class DashboardRequest(RowsRequest):
    filters: DashboardFiltersModel = Field(default_factory=DashboardFiltersModel)
