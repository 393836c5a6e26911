from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence

from statboard.parsing import parse_percent
from statboard.sections import POSITION_COLUMN, SECONDARY_COLUMN, Section, TargetRange


logger = logging.getLogger(__name__)

Outcome = Literal["LOW", "GOOD", "HIGH"]
Row = Mapping[str, Any]

LOW: Outcome = "LOW"
GOOD: Outcome = "GOOD"
HIGH: Outcome = "HIGH"


@dataclass(frozen=True)
class ClassifiedRow:
    position: str
    hands: Optional[str]
    value: float
    target: TargetRange
    result: Outcome
    rec_action: str

    @property
    def is_good(self) -> bool:
        return self.result == GOOD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "hands": self.hands,
            "value": self.value,
            "target": {"min": self.target.min, "max": self.target.max},
            "result": self.result,
            "rec_action": self.rec_action,
        }


def classify(value: float, target: TargetRange) -> Outcome:
    # both bounds count as out of range
    if value <= target.min:
        return LOW
    if value >= target.max:
        return HIGH
    return GOOD


def classify_row(row: Row, section: Section) -> Optional[ClassifiedRow]:
    """Classify one row under one section, or ``None`` when the row has nothing to say there."""
    position = str(row.get(POSITION_COLUMN) or "").strip()
    if not position:
        return None
    target = section.target_for(position)
    if target is None:
        return None
    value = parse_percent(row.get(section.column))
    if value is None:
        return None

    result = classify(value, target)
    hands = row.get(SECONDARY_COLUMN)
    return ClassifiedRow(
        position=position,
        hands=None if hands is None else str(hands),
        value=value,
        target=target,
        result=result,
        rec_action=section.action_for(result),
    )


def classify_section(rows: Sequence[Row], section: Section) -> List[ClassifiedRow]:
    out: List[ClassifiedRow] = []
    for r in rows:
        item = classify_row(r, section)
        if item is not None:
            out.append(item)
    return out


def classify_rows(rows: Sequence[Row], sections: Sequence[Section]) -> Dict[str, List[ClassifiedRow]]:
    computed: Dict[str, List[ClassifiedRow]] = {}
    for section in sections:
        computed[section.key] = classify_section(rows, section)
    logger.debug(
        "classified %d rows: %s",
        len(rows),
        {k: len(v) for k, v in computed.items()},
    )
    return computed
