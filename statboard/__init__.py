"""Core (UI-agnostic) stat dashboard logic.

This package contains:
- percentage parsing of raw cells
- the section catalog (per-position target ranges)
- row classification and per-section / overall statistics
- view selection (scope, query, sort, row filters)
- CSV loading and export helpers
- chart helpers (Altair -> Vega-Lite spec dict)
"""

from __future__ import annotations
