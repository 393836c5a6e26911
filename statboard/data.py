from __future__ import annotations

import logging
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Dict, List, Sequence, Union

import pandas as pd

from statboard.classify import ClassifiedRow


logger = logging.getLogger(__name__)

CsvSource = Union[bytes, str, Path, IO[bytes]]  # str is CSV text, Path names a file

EXPORT_COLUMNS = ["Position", "Hands", "Value", "Result", "Target", "Rec. action"]


class CsvLoadError(ValueError):
    """Raised when an uploaded file cannot be read as a delimited table."""


def load_rows_from_csv(source: CsvSource) -> List[Dict[str, str]]:
    """Read a CSV export into row dicts, every cell as a string.

    The first line is the header, blank lines are skipped and cells missing
    from short lines come back as ``""``.
    """
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)
    elif isinstance(source, str):
        source = StringIO(source.lstrip("\ufeff"))
    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Failed to parse CSV: %s", exc)
        raise CsvLoadError(f"Failed to parse CSV: {exc}") from exc

    df = df.fillna("")
    return df.to_dict(orient="records")


def section_rows_frame(rows: Sequence[ClassifiedRow]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return pd.DataFrame(
        [
            {
                "Position": r.position,
                "Hands": r.hands or "",
                "Value": round(r.value, 2),
                "Result": r.result,
                "Target": f"{r.target.min:g}% - {r.target.max:g}%",
                "Rec. action": r.rec_action,
            }
            for r in rows
        ],
        columns=EXPORT_COLUMNS,
    )


def export_csv_bytes(df: pd.DataFrame) -> bytes:
    if df is None or not hasattr(df, "to_csv"):
        df = pd.DataFrame()
    return df.to_csv(index=False).encode("utf-8")
