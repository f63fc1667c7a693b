from __future__ import annotations
import os
from typing import Optional, Tuple
import pandas as pd
import matplotlib.pyplot as plt


def _ensure_dir(p: Optional[str]) -> None:
    if p:
        d = os.path.dirname(p)
        if d and not os.path.exists(d):
            os.makedirs(d, exist_ok=True)


def _finish(fig: plt.Figure, out_path: Optional[str], show: bool) -> Optional[str]:
    fig.tight_layout()
    saved = None
    if out_path:
        _ensure_dir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
        saved = out_path
    if show:
        plt.show()
    else:
        plt.close(fig)
    return saved


def plot_category_breakdown(
    table: pd.DataFrame,
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """
    Horizontal stacked bars: one bar per category, one segment per disposition.
    Expects the output of metrics.breakdown_table().
    """
    required = {"category", "category_total", "disposition", "count"}
    missing = required - set(table.columns)
    if missing:
        raise ValueError(f"table is missing columns: {missing}")

    fig, ax = plt.subplots(figsize=(10, 0.6 * max(3, table["category"].nunique()) + 1.5))
    if table.empty:
        ax.text(0.5, 0.5, "No classified calls", ha="center", va="center")
        ax.axis("off")
        return fig, ax, _finish(fig, out_path, show)

    order = table.drop_duplicates("category")["category"].tolist()[::-1]  # largest on top
    pivot = (table.pivot_table(index="category", columns="disposition", values="count",
                               aggfunc="sum", fill_value=0)
                  .reindex(order))
    left = pd.Series(0, index=pivot.index)
    for disposition in pivot.columns:
        vals = pivot[disposition]
        ax.barh(pivot.index, vals, left=left, label=disposition)
        left = left + vals

    totals = table.drop_duplicates("category").set_index("category")["category_total"]
    for y, cat in enumerate(pivot.index):
        ax.text(left[cat], y, f" {int(totals[cat]):,}", va="center", fontsize=9)

    ax.set_title("Disposition Breakdown by Category")
    ax.set_xlabel("Calls")
    ax.legend(fontsize=7, loc="lower right")
    return fig, ax, _finish(fig, out_path, show)


def plot_keywords(
    kw: pd.DataFrame,
    title: str = "Common Keywords",
    out_path: Optional[str] = None,
    show: bool = False,
) -> Tuple[plt.Figure, plt.Axes, Optional[str]]:
    """Bar chart of metrics.keyword_frequency() output (columns: word, count)."""
    missing = {"word", "count"} - set(kw.columns)
    if missing:
        raise ValueError(f"kw is missing columns: {missing}")

    fig, ax = plt.subplots(figsize=(8, 0.3 * max(5, len(kw)) + 1.0))
    data = kw.iloc[::-1]
    ax.barh(data["word"].astype(str), data["count"])
    ax.set_title(title)
    ax.set_xlabel("Mentions")
    return fig, ax, _finish(fig, out_path, show)
