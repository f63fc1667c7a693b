# Ensure `src/` is on sys.path so tests can import `call_explorer` without requiring editable install
import os
import sys

import pandas as pd
import pytest

HERE = os.path.dirname(__file__)
SRC = os.path.abspath(os.path.join(HERE, "..", "src"))
if os.path.isdir(SRC) and SRC not in sys.path:
    sys.path.insert(0, SRC)

SAMPLE_CSV = os.path.join(HERE, "data", "calls_sample.csv")


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def calls(sample_csv):
    from call_explorer.data_prep import drop_cancelled, load_calls
    return drop_cancelled(load_calls(sample_csv))


def make_calls(*rows):
    """rows: (disposition, note) pairs or bare dispositions."""
    recs = [{"Disposition": r[0], "Note": r[1]} if isinstance(r, tuple) else {"Disposition": r, "Note": None}
            for r in rows]
    return pd.DataFrame(recs, columns=["Disposition", "Note"])
