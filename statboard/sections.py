"""Section catalog: which column each metric group reads and its per-position targets."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple


logger = logging.getLogger(__name__)

POSITION_COLUMN = "Position"
SECONDARY_COLUMN = "Hands"

SECTIONS_PATH_ENV = "STATBOARD_SECTIONS_PATH"


@dataclass(frozen=True)
class TargetRange:
    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"Target range min {self.min} is greater than max {self.max}")


@dataclass(frozen=True)
class Section:
    key: str
    title: str
    column: str
    targets: Mapping[str, TargetRange]
    low_action: str
    good_action: str
    high_action: str

    def target_for(self, position: str) -> TargetRange | None:
        # exact label match, no case folding
        return self.targets.get(position)

    def action_for(self, outcome: str) -> str:
        if outcome == "GOOD":
            return self.good_action
        if outcome == "LOW":
            return self.low_action
        return self.high_action


def _targets(pairs: Dict[str, Tuple[float, float]]) -> Dict[str, Dict[str, float]]:
    return {pos: {"min": lo, "max": hi} for pos, (lo, hi) in pairs.items()}


DEFAULT_SECTIONS: Tuple[Dict[str, Any], ...] = (
    {
        "key": "vpip",
        "title": "VPIP",
        "column": "VPIP",
        "targets": _targets({"UTG": (12, 18), "HJ": (15, 21), "CO": (22, 29), "Button": (35, 48), "SB": (25, 38), "BB": (25, 40)}),
        "low_action": "Open up: you are folding playable hands",
        "good_action": "Keep your current range",
        "high_action": "Tighten up: too many marginal hands",
    },
    {
        "key": "pfr",
        "title": "PFR",
        "column": "PFR",
        "targets": _targets({"UTG": (11, 17), "HJ": (14, 20), "CO": (20, 27), "Button": (30, 42), "SB": (18, 30), "BB": (6, 14)}),
        "low_action": "Raise more instead of limping or calling",
        "good_action": "Keep your current raising range",
        "high_action": "Raise fewer marginal hands",
    },
    {
        "key": "three_bet",
        "title": "3-bet",
        "column": "3Bet PF",
        "targets": _targets({"UTG": (3, 6), "HJ": (4, 7), "CO": (5, 9), "Button": (7, 12), "SB": (8, 14), "BB": (8, 14)}),
        "low_action": "Add more value and bluff 3-bets",
        "good_action": "Balanced",
        "high_action": "Cut light 3-bets",
    },
    {
        "key": "fold_to_three_bet",
        "title": "Fold to 3-bet",
        "column": "Fold to 3-bet",
        "targets": _targets({"UTG": (50, 62), "HJ": (50, 62), "CO": (48, 60), "Button": (50, 65), "SB": (45, 60)}),
        "low_action": "Fold more against 3-bets",
        "good_action": "Balanced",
        "high_action": "Defend wider against 3-bets",
    },
    {
        "key": "steal",
        "title": "Attempt to steal",
        "column": "Att To Steal",
        "targets": _targets({"CO": (28, 38), "Button": (40, 55), "SB": (35, 50)}),
        "low_action": "Steal the blinds more often",
        "good_action": "Keep your stealing frequency",
        "high_action": "Steal less against defending blinds",
    },
    {
        "key": "fold_bb_to_steal",
        "title": "Fold BB to steal",
        "column": "Fold BB to Steal",
        "targets": _targets({"BB": (55, 70)}),
        "low_action": "Fold more trash from the big blind",
        "good_action": "Balanced defence",
        "high_action": "Defend the big blind wider",
    },
    {
        "key": "cbet_flop",
        "title": "Flop C-bet",
        "column": "CBet F",
        "targets": _targets({"UTG": (50, 65), "HJ": (50, 65), "CO": (55, 70), "Button": (55, 72), "SB": (45, 60), "BB": (40, 60)}),
        "low_action": "C-bet more on favourable boards",
        "good_action": "Keep your c-bet frequency",
        "high_action": "Check back more weak hands",
    },
    {
        "key": "fold_to_cbet_flop",
        "title": "Fold to flop C-bet",
        "column": "Fold to F CBet",
        "targets": _targets({"UTG": (35, 50), "HJ": (35, 50), "CO": (35, 50), "Button": (35, 50), "SB": (38, 52), "BB": (38, 52)}),
        "low_action": "Let go of weak floats",
        "good_action": "Balanced",
        "high_action": "Float and raise the flop more",
    },
)


def build_catalog(raw_sections: Iterable[Mapping[str, Any]]) -> Tuple[Section, ...]:
    out = []
    seen = set()
    for raw in raw_sections:
        key = str(raw["key"])
        if key in seen:
            raise ValueError(f"Duplicate section key: {key}")
        seen.add(key)
        targets = {
            str(pos): TargetRange(float(t["min"]), float(t["max"]))
            for pos, t in (raw.get("targets") or {}).items()
        }
        out.append(
            Section(
                key=key,
                title=str(raw.get("title", key)),
                column=str(raw.get("column", key)),
                targets=MappingProxyType(targets),
                low_action=str(raw.get("low_action", "")),
                good_action=str(raw.get("good_action", "")),
                high_action=str(raw.get("high_action", "")),
            )
        )
    return tuple(out)


def load_sections(path: Path | str) -> Tuple[Section, ...]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get("sections", [])
    return build_catalog(raw)


@lru_cache(maxsize=1)
def get_sections() -> Tuple[Section, ...]:
    path = os.environ.get(SECTIONS_PATH_ENV)
    if path:
        logger.info("Loading section catalog from %s", path)
        return load_sections(path)
    return build_catalog(DEFAULT_SECTIONS)


def section_to_dict(section: Section) -> Dict[str, Any]:
    return {
        "key": section.key,
        "title": section.title,
        "column": section.column,
        "targets": {pos: {"min": t.min, "max": t.max} for pos, t in section.targets.items()},
        "low_action": section.low_action,
        "good_action": section.good_action,
        "high_action": section.high_action,
    }
