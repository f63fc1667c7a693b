from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional
import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import CountVectorizer

from call_explorer.config import DISPOSITION_COL, KEYWORD_LIMIT, MIN_WORD_LEN, NOTE_COL, NOTE_LIMIT
from call_explorer.data_prep import clean_note
from call_explorer.taxonomy import CATEGORY_TAXONOMY, KNOWN_DISPOSITIONS, STOP_WORDS

logger = logging.getLogger(__name__)

Breakdown = Dict[str, Dict]


def disposition_counts(df: pd.DataFrame) -> pd.Series:
    return df[DISPOSITION_COL].value_counts(dropna=True)


def classify(df: pd.DataFrame, taxonomy=CATEGORY_TAXONOMY) -> Breakdown:
    """
    Group the working set's dispositions into taxonomy categories.

    Returns {category: {"dispositions": {disposition: count}, "total": int}}
    in taxonomy order. Categories with no calls are left out, and so are
    dispositions no category lists (they stay in `df`, see
    `unmapped_dispositions`).
    """
    counts = disposition_counts(df)
    out: Breakdown = {}
    for category, members in taxonomy.items():
        found = {d: int(counts[d]) for d in members if counts.get(d, 0) > 0}
        total = sum(found.values())
        if total > 0:
            out[category] = {"dispositions": found, "total": total}
    return out


def unmapped_dispositions(df: pd.DataFrame, known=KNOWN_DISPOSITIONS) -> pd.Series:
    counts = disposition_counts(df)
    return counts[~counts.index.isin(list(known))]


def _pct(n: int, n_calls: int) -> float:
    return round(100.0 * n / n_calls, 1) if n_calls else 0.0


def breakdown_table(breakdown: Breakdown, n_calls: int) -> pd.DataFrame:
    """Long table (one row per disposition) ordered the way the overview shows it."""
    cols = ["category", "category_total", "category_pct", "disposition", "count", "pct"]
    rows = []
    # categories by total desc (ties keep taxonomy order), dispositions by count desc within each
    ranked = sorted(breakdown.items(), key=lambda kv: kv[1]["total"], reverse=True)
    for category, data in ranked:
        for disposition, n in sorted(data["dispositions"].items(), key=lambda kv: kv[1], reverse=True):
            rows.append({
                "category": category,
                "category_total": data["total"],
                "category_pct": _pct(data["total"], n_calls),
                "disposition": disposition,
                "count": n,
                "pct": _pct(n, n_calls),
            })
    return pd.DataFrame(rows, columns=cols)


def notes_for(df: pd.DataFrame, disposition, limit: int = NOTE_LIMIT) -> List[str]:
    """Non-empty notes of calls with exactly this disposition, first `limit` in file order."""
    sub = df.loc[df[DISPOSITION_COL] == disposition, NOTE_COL].map(clean_note)
    return sub[sub != ""].head(limit).tolist()


def keyword_frequency(notes: Iterable, top_k: int = KEYWORD_LIMIT,
                      min_len: int = MIN_WORD_LEN, stop_words=STOP_WORDS) -> pd.DataFrame:
    """
    Most frequent words across all notes combined.

    Lowercased; any run of ASCII word characters is a token, so punctuation
    splits words; tokens shorter than `min_len` and stop-words are dropped.
    Sorted by count desc, ties alphabetical. Columns: word, count.
    """
    empty = pd.DataFrame({"word": pd.Series(dtype=object), "count": pd.Series(dtype="int64")})
    docs = [n for n in (clean_note(x) for x in notes) if n]
    if not docs:
        return empty

    vec = CountVectorizer(lowercase=True, token_pattern=rf"(?a)\w{{{min_len},}}")
    try:
        X = vec.fit_transform(docs)
    except ValueError:
        # no token survives the length filter
        return empty
    vocab = vec.get_feature_names_out()  # alphabetical
    counts = np.asarray(X.sum(0)).ravel()
    kw = pd.DataFrame({"word": vocab, "count": counts.astype("int64")})
    kw = kw[~kw["word"].isin(list(stop_words))]
    return kw.sort_values("count", ascending=False, kind="stable").head(top_k).reset_index(drop=True)


def summarize(df: pd.DataFrame) -> Breakdown:
    """classify() the working set and log what the taxonomy does not cover."""
    breakdown = classify(df)
    unmapped = unmapped_dispositions(df)
    if not unmapped.empty:
        logger.warning("%d calls have dispositions outside the taxonomy: %s",
                       int(unmapped.sum()), dict(unmapped))
    logger.info("%d categories, %d of %d calls classified", len(breakdown),
                sum(d["total"] for d in breakdown.values()), len(df))
    return breakdown


def disposition_total(breakdown: Breakdown, disposition) -> Optional[int]:
    for data in breakdown.values():
        if disposition in data["dispositions"]:
            return data["dispositions"][disposition]
    return None
