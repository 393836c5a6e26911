from __future__ import annotations

import logging
import math
from typing import Literal

import numpy as np
import pandas as pd
from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import DashboardFiltersModel, DashboardRequest, RowsRequest
from statboard.classify import classify_rows
from statboard.dashboard import compute_dashboard
from statboard.data import CsvLoadError, export_csv_bytes, load_rows_from_csv, section_rows_frame
from statboard.filters import DashboardFilters, apply_row_filter, effective_filter, normalize_filters
from statboard.sections import get_sections, section_to_dict
from statboard.stats import summarize_section


app = FastAPI(title="Stat Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: DashboardFiltersModel) -> DashboardFilters:
    raw = model.model_dump()
    return normalize_filters(raw, section_keys=[s.key for s in get_sections()])


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


@app.get("/meta/sections")
def meta_sections():
    try:
        return _json({"sections": [section_to_dict(s) for s in get_sections()]})
    except Exception as exc:
        logger.exception("meta_sections failed")
        return _error(exc)


@app.post("/classify")
def classify(body: RowsRequest):
    try:
        computed = classify_rows(body.rows, get_sections())
        return _json({key: [r.to_dict() for r in rows] for key, rows in computed.items()})
    except Exception as exc:
        logger.exception("classify failed")
        return _error(exc)


@app.post("/dashboard")
def dashboard(body: DashboardRequest):
    try:
        f = _filters_from_model(body.filters)
        return _json(compute_dashboard(body.rows, get_sections(), f))
    except Exception as exc:
        logger.exception("dashboard failed")
        return _error(exc)


@app.post("/dashboard/csv")
async def dashboard_csv(
    request: Request,
    global_filter: Literal["ALL", "GOOD", "BAD"] = Query(default="ALL"),
    scope: Literal["ALL", "WITH_BAD", "WITH_DATA"] = Query(default="ALL"),
    query: str = Query(default=""),
    sort_mode: Literal["MOST_BAD", "A_Z"] = Query(default="MOST_BAD"),
):
    try:
        rows = load_rows_from_csv(await request.body())
        f = _filters_from_model(
            DashboardFiltersModel(global_filter=global_filter, scope=scope, query=query, sort_mode=sort_mode)
        )
        return _json(compute_dashboard(rows, get_sections(), f))
    except CsvLoadError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("dashboard_csv failed")
        return _error(exc)


@app.post("/export/{section_key}")
def export_section(section_key: str, body: DashboardRequest):
    try:
        section = next((s for s in get_sections() if s.key == section_key), None)
        if section is None:
            return JSONResponse(status_code=404, content={"error": f"Unknown section: {section_key}", "type": "KeyError"})

        f = _filters_from_model(body.filters)
        stats = summarize_section(section, classify_rows(body.rows, [section])[section.key])
        rows = apply_row_filter(stats.rows, effective_filter(f.global_filter, f.local_filter(section.key)))
        csv_bytes = export_csv_bytes(section_rows_frame(rows))
        filename = f"{section.key}.csv"
        return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
    except Exception as exc:
        logger.exception("export_section failed")
        return _error(exc)
