import pandas as pd

from call_explorer.data_prep import drop_cancelled
from call_explorer.metrics import (
    breakdown_table, classify, disposition_total, keyword_frequency, notes_for, summarize,
    unmapped_dispositions,
)
from call_explorer.taxonomy import CATEGORY_TAXONOMY, STOP_WORDS, category_of
from conftest import make_calls


def test_classify_example():
    df = make_calls("Left Voicemail", "cancelled", "No Answer", "Left Voicemail")
    ws = drop_cancelled(df)
    assert len(ws) == 3
    out = classify(ws)
    assert out == {
        "No Contact": {"dispositions": {"No Answer": 1}, "total": 1},
        "Voicemail": {"dispositions": {"Left Voicemail": 2}, "total": 2},
    }


def test_classify_sample(calls):
    out = classify(calls)
    assert out["Voicemail"] == {"dispositions": {"Left Voicemail": 2, "went to voicemail": 1}, "total": 3}
    assert out["Connected - Technical"]["total"] == 2
    assert out["Connected - Questions"]["dispositions"] == {"Answered - Connected - Funding Questions": 1}
    assert "Other" not in out  # empty categories are omitted
    assert list(out) == [c for c in CATEGORY_TAXONOMY if c in out]


def test_unmapped_dispositions_are_excluded_from_breakdown(calls):
    out = classify(calls)
    classified = sum(d["total"] for d in out.values())
    assert classified == 7 < len(calls)
    assert all("Gatekeeper" not in d["dispositions"] for d in out.values())
    # still present in the raw working set
    assert "Gatekeeper" in set(calls["Disposition"])
    assert unmapped_dispositions(calls).to_dict() == {"Gatekeeper": 1}


def test_classify_is_order_independent_and_idempotent(calls):
    shuffled = calls.sample(frac=1, random_state=7).reset_index(drop=True)
    assert classify(calls) == classify(calls) == classify(shuffled)


def test_disposition_labels_are_case_sensitive():
    out = classify(make_calls("No Answer", "no answer", "NO ANSWER"))
    assert out["No Contact"] == {"dispositions": {"No Answer": 1, "no answer": 1}, "total": 2}


def test_null_dispositions_are_ignored():
    assert classify(make_calls(None, "Hook Rejected")) == {
        "Busy/DNC": {"dispositions": {"Hook Rejected": 1}, "total": 1},
    }


def test_summarize_logs_unmapped(calls, caplog):
    with caplog.at_level("WARNING", logger="call_explorer.metrics"):
        breakdown = summarize(calls)
    assert breakdown == classify(calls)
    assert "Gatekeeper" in caplog.text


def test_breakdown_table_order_and_pct(calls):
    tbl = breakdown_table(classify(calls), len(calls))
    assert tbl["category"].drop_duplicates().tolist() == [
        "Voicemail", "Connected - Technical", "No Contact", "Connected - Questions",
    ]
    first = tbl.iloc[0]
    assert (first["disposition"], first["count"], first["pct"]) == ("Left Voicemail", 2, 25.0)
    assert first["category_pct"] == 37.5


def test_breakdown_table_empty():
    tbl = breakdown_table({}, 0)
    assert tbl.empty
    assert "category_total" in tbl.columns


def test_disposition_total(calls):
    b = classify(calls)
    assert disposition_total(b, "Left Voicemail") == 2
    assert disposition_total(b, "Gatekeeper") is None


def test_notes_for_filters_and_orders(calls):
    assert notes_for(calls, "Left Voicemail") == ["Left a message about onboarding."]
    assert notes_for(calls, "Answered - Connected - Technical Issues") == [
        "Customer cannot login, login page errors.",
        "Login fixed after password reset",
    ]
    assert notes_for(calls, "went to voicemail") == []
    assert notes_for(calls, "Not A Disposition") == []


def test_notes_for_caps_at_100():
    df = make_calls(*[("No Answer", f"note {i}") for i in range(150)], ("No Answer", None))
    notes = notes_for(df, "No Answer")
    assert len(notes) == 100
    assert notes[0] == "note 0" and notes[-1] == "note 99"


def test_keyword_frequency_example():
    kw = keyword_frequency(["Great call, customer happy", "Great service overall"])
    pairs = list(zip(kw["word"], kw["count"]))
    assert pairs[0] == ("great", 2)
    assert all(c == 1 for _, c in pairs[1:])
    assert "call" in kw["word"].tolist()


def test_keyword_frequency_sample(calls):
    kw = keyword_frequency(notes_for(calls, "Answered - Connected - Technical Issues"))
    assert list(zip(kw["word"], kw["count"])) == [
        ("login", 3), ("after", 1), ("cannot", 1), ("customer", 1), ("errors", 1),
        ("fixed", 1), ("page", 1), ("password", 1), ("reset", 1),
    ]


def test_keyword_frequency_filters():
    kw = keyword_frequency(["They would have said this: the API was down, down, DOWN!", None, ""])
    words = kw["word"].tolist()
    assert words[0] == "down"
    assert kw["count"].iloc[0] == 3
    assert all(len(w) > 3 and w not in STOP_WORDS for w in words)
    assert "they" not in words and "would" not in words and "said" in words


def test_keyword_frequency_punctuation_splits_words():
    kw = keyword_frequency(["follow-up; e-mail"])
    assert kw["word"].tolist() == ["follow", "mail"]


def test_keyword_frequency_caps_and_descends():
    notes = [" ".join(f"word{i:02d}" for i in range(40) for _ in range(i % 5 + 1))]
    kw = keyword_frequency(notes)
    assert len(kw) == 25
    counts = kw["count"].tolist()
    assert counts == sorted(counts, reverse=True)


def test_keyword_frequency_empty():
    for notes in ([], [None, ""], ["a an the big dog"]):
        kw = keyword_frequency(notes)
        assert kw.empty
        assert list(kw.columns) == ["word", "count"]


def test_category_of():
    assert category_of("Hook Rejected") == "Busy/DNC"
    assert category_of("Gatekeeper") is None


def test_keyword_frequency_ascii_word_chars():
    # non-ASCII letters split words like punctuation does
    kw = keyword_frequency(["café café résumé visit"])
    assert kw["word"].tolist() == ["visit"]
