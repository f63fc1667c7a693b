"""Terminal rendition of the explorer: overview table, or one disposition's detail."""

from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional
import pandas as pd

from call_explorer.config import configure_logging, data_path
from call_explorer.data_prep import CallDataError, drop_cancelled, load_calls
from call_explorer.metrics import breakdown_table, keyword_frequency, notes_for, summarize
from call_explorer.viz import plot_category_breakdown, plot_keywords

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="call-explorer", description="Explore call dispositions in a CSV export.")
    p.add_argument("--data", default=None, help="CSV export (default: $CALL_DATA_PATH or the bundled file name)")
    p.add_argument("--disposition", default=None, help="show notes + keywords for this disposition")
    p.add_argument("--chart", default=None, help="save a chart to this PNG (category breakdown, or keywords with --disposition)")
    p.add_argument("--log-level", default=None)
    return p


def render_overview(table: pd.DataFrame, n_calls: int) -> str:
    lines = [f"Disposition Breakdown by Category ({n_calls:,} calls)", ""]
    for category, sub in table.groupby("category", sort=False):
        first = sub.iloc[0]
        lines.append(f"{category}: {int(first['category_total']):,} calls ({first['category_pct']:.1f}%)")
        for _, r in sub.iterrows():
            lines.append(f"    {r['disposition']:<60} {int(r['count']):>7,} ({r['pct']:.1f}%)")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_detail(disposition: str, notes: List[str], kw: pd.DataFrame) -> str:
    lines = [disposition, "", "Common Keywords"]
    lines.append("  " + ", ".join(f"{w} ({c})" for w, c in zip(kw["word"], kw["count"])) if not kw.empty else "  -")
    lines += ["", f"Call Notes ({len(notes)})"]
    if notes:
        lines += [f"- {n}" for n in notes]
    else:
        lines.append("No notes available for this disposition.")
    return "\n".join(lines) + "\n"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        calls = drop_cancelled(load_calls(args.data or data_path()))
    except CallDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.disposition:
        notes = notes_for(calls, args.disposition)
        kw = keyword_frequency(notes)
        sys.stdout.write(render_detail(args.disposition, notes, kw))
        if args.chart:
            _, _, saved = plot_keywords(kw, title=f"Common Keywords: {args.disposition}", out_path=args.chart)
            logger.info("chart saved to %s", saved)
        return 0

    table = breakdown_table(summarize(calls), len(calls))
    sys.stdout.write(render_overview(table, len(calls)))
    if args.chart:
        _, _, saved = plot_category_breakdown(table, out_path=args.chart)
        logger.info("chart saved to %s", saved)
    return 0


if __name__ == "__main__":
    sys.exit(main())
