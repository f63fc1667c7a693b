from __future__ import annotations
import io, logging, os
from typing import IO, Union
import pandas as pd

from call_explorer.config import CANCELLED_DISPOSITION, DISPOSITION_COL, NOTE_COL

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO]


class CallDataError(Exception):
    """Terminal load failure; the message is shown to the user verbatim."""


class FetchFailure(CallDataError):
    pass


class ParseFailure(CallDataError, ValueError):
    pass


def _read_text(source: Source) -> str:
    if hasattr(source, "read"):
        raw = source.read()
    else:
        with open(source, "rb") as fh:
            raw = fh.read()
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8-sig", errors="replace")
    return raw


def read_source(source: Source) -> str:
    try:
        return _read_text(source)
    except OSError as e:
        raise FetchFailure(f"Error loading file: {e}") from e


def parse_calls(text: str) -> pd.DataFrame:
    """
    Parse CSV text into one row per call. Header row names the fields,
    values are type-coerced by pandas, blank lines are skipped.
    Only empty cells are null; "N/A", "None" etc. stay text.
    Requires a `Disposition` column; `Note` is optional (added as null).
    """
    try:
        df = pd.read_csv(io.StringIO(text), skip_blank_lines=True,
                         keep_default_na=False, na_values=[""])
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ParseFailure(f"Error parsing CSV: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    if DISPOSITION_COL not in df.columns:
        raise ParseFailure(
            f"Error parsing CSV: missing required column {DISPOSITION_COL!r}. Found: {list(df.columns)}"
        )
    if NOTE_COL not in df.columns:
        df[NOTE_COL] = None
    return df


def load_calls(source: Source) -> pd.DataFrame:
    """Read + parse a call export. Raises FetchFailure or ParseFailure."""
    df = parse_calls(read_source(source))
    logger.info("loaded %d call records (%d columns)", len(df), df.shape[1])
    return df


def drop_cancelled(df: pd.DataFrame) -> pd.DataFrame:
    """Working set: every row except the `cancelled` sentinel disposition."""
    keep = df[DISPOSITION_COL] != CANCELLED_DISPOSITION
    dropped = int((~keep).sum())
    if dropped:
        logger.info("dropped %d cancelled rows", dropped)
    return df.loc[keep].reset_index(drop=True)


def clean_note(x) -> str:
    # null / NaN -> ""; numbers coerced by read_csv come back as text
    if x is None or (not isinstance(x, str) and pd.isna(x)):
        return ""
    return str(x)
