from __future__ import annotations

import pytest

from statboard.classify import classify_rows
from statboard.stats import compute_section_stats, compute_totals, stats_frame, summarize_section


def _rows(*values: str):
    return [{"Position": "Button", "VPIP": v} for v in values]


class TestSectionStats:
    def test_counts_and_fraction(self, catalog) -> None:
        computed = classify_rows(_rows("30", "10", "60"), catalog)
        vpip, steal = compute_section_stats(computed, catalog)
        assert (vpip.good, vpip.bad, vpip.total) == (1, 2, 3)
        assert vpip.fraction_good == pytest.approx(1 / 3)
        assert [r.result for r in vpip.rows] == ["GOOD", "LOW", "HIGH"]
        assert steal.total == 0

    def test_zero_rows_fraction_is_zero(self, catalog) -> None:
        stats = summarize_section(catalog[0], [])
        assert stats.fraction_good == 0.0
        assert stats.good == stats.bad == 0

    def test_catalog_order_and_missing_keys(self, catalog) -> None:
        stats = compute_section_stats({}, catalog)
        assert [x.section.key for x in stats] == ["vpip", "steal"]

    def test_end_to_end_section(self, fold_section) -> None:
        computed = classify_rows([{"Position": "Button", "Fold to 3-bet": "45%"}], [fold_section])
        (stats,) = compute_section_stats(computed, [fold_section])
        assert (stats.total, stats.good, stats.bad, stats.fraction_good) == (1, 0, 1, 0.0)


class TestTotals:
    def test_totals(self, catalog) -> None:
        rows = [
            {"Position": "Button", "VPIP": "30", "Att To Steal": "45"},
            {"Position": "Button", "VPIP": "45", "Att To Steal": "50"},
        ]
        totals = compute_totals(compute_section_stats(classify_rows(rows, catalog), catalog))
        assert totals.total_rows == 4
        assert totals.total_good == 3
        assert totals.total_bad == 1
        assert totals.fraction_good == pytest.approx(0.75)
        assert totals.sections_with_data == 2
        assert totals.sections_with_bad == 1

    def test_empty_totals(self, catalog) -> None:
        totals = compute_totals(compute_section_stats({}, catalog))
        assert totals.total_rows == 0
        assert totals.fraction_good == 0.0
        assert totals.sections_with_data == 0
        assert totals.sections_with_bad == 0

    def test_order_independent(self, catalog) -> None:
        stats = compute_section_stats(classify_rows(_rows("30", "10"), catalog), catalog)
        assert compute_totals(stats) == compute_totals(list(reversed(stats)))


class TestStatsFrame:
    def test_one_row_per_section(self, catalog) -> None:
        df = stats_frame(compute_section_stats(classify_rows(_rows("30"), catalog), catalog))
        assert df["key"].tolist() == ["vpip", "steal"]
        assert df["rows"].tolist() == [1, 0]

    def test_empty(self) -> None:
        df = stats_frame([])
        assert df.empty
        assert "fraction_good" in df.columns
