from __future__ import annotations

import pytest

from statboard.sections import build_catalog


@pytest.fixture
def fold_section():
    (section,) = build_catalog(
        [
            {
                "key": "fold_to_3bet",
                "title": "Fold to 3-bet",
                "column": "Fold to 3-bet",
                "targets": {"Button": {"min": 50, "max": 65}},
                "low_action": "tighten",
                "good_action": "balanced",
                "high_action": "widen",
            }
        ]
    )
    return section


@pytest.fixture
def catalog():
    return build_catalog(
        [
            {
                "key": "vpip",
                "title": "VPIP",
                "column": "VPIP",
                "targets": {"Button": {"min": 20, "max": 40}, "BB": {"min": 25, "max": 40}},
                "low_action": "open up",
                "good_action": "keep",
                "high_action": "tighten",
            },
            {
                "key": "steal",
                "title": "Attempt to steal",
                "column": "Att To Steal",
                "targets": {"Button": {"min": 40, "max": 55}},
                "low_action": "steal more",
                "good_action": "keep",
                "high_action": "steal less",
            },
        ]
    )
