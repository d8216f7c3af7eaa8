# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: test_correction_store.py
# -----------------------------------------------------------------------------
import json
import logging
import threading
from datetime import datetime, timedelta, timezone

import pytest

from errors.RecommendationErrors import StorageError
from learning.CorrectionRecord import CorrectedFields, CorrectionFilter, OriginalGuess
from learning.JsonlCorrectionStore import JsonlCorrectionStore, clamp_weight
from learning.SeedPatterns import SEED_CORRECTIONS, SEED_SOURCE, create_seed_patterns


@pytest.fixture
def store(tmp_path) -> JsonlCorrectionStore:
    return JsonlCorrectionStore(tmp_path / "data" / "learning-data.jsonl")


GUESS = {"amount": 0, "category": "Другое", "type": "expense", "confidence": 0.4}


def test_weight_above_one_is_clamped_and_logged(store, caplog):
    with caplog.at_level(logging.WARNING):
        rec = store.record_correction("такси", GUESS, {"category": "Транспорт"}, "user-1", 1.7)

    assert rec.weight == 1.0
    assert [r.weight for r in store.list_corrections()] == [1.0]
    assert any("clamped" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("raw, expected", [(-0.5, 0.0), (0.25, 0.25), (1, 1.0), (float("nan"), 0.0)])
def test_clamp_weight(raw, expected):
    assert clamp_weight(raw) == expected


def test_n_appends_round_trip_every_field(store):
    inputs = []
    for i in range(5):
        guess = OriginalGuess(amount=1000 * i, category="Другое", type="expense", confidence=0.3 + i / 10)
        fixed = CorrectedFields(amount=1500.5 * i, category=f"Cat{i}", merchant=f"Shop {i}")
        inputs.append((f"text number {i}", guess, fixed, f"user-{i}", 0.1 * i))
        store.record_correction(f"text number {i}", guess, fixed, f"user-{i}", 0.1 * i)

    records = list(store.list_corrections())

    assert len(records) == 5
    for rec, (text, guess, fixed, source, weight) in zip(records, inputs):
        assert rec.original_text == text
        assert rec.original_guess == guess
        assert rec.corrected_fields == fixed
        assert rec.source == source
        assert rec.weight == weight
        assert rec.timestamp.tzinfo is not None


def test_returned_record_equals_stored_record(store):
    rec = store.record_correction("купил в maxway", GUESS, {"category": "Еда", "merchant": "MaxWay"}, "u", 0.3)
    assert list(store.list_corrections()) == [rec]


def test_append_only_one_line_per_record(store):
    store.record_correction("a", GUESS, {"category": "Еда"}, "u", 0.5)
    first_line = store.path.read_text(encoding="utf-8").splitlines()[0]
    store.record_correction("b", GUESS, {"category": "Транспорт"}, "u", 0.5)

    lines = store.path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0] == first_line
    assert json.loads(lines[1])["original_text"] == "b"


def test_list_is_lazy_and_restartable(store):
    store.record_correction("a", GUESS, {"category": "Еда"}, "u", 0.5)
    gen = store.list_corrections()
    assert next(gen).original_text == "a"

    store.record_correction("b", GUESS, {"category": "Еда"}, "u", 0.5)
    assert [r.original_text for r in store.list_corrections()] == ["a", "b"]


def test_missing_file_lists_nothing(store):
    assert list(store.list_corrections()) == []


def test_filters(store):
    store.record_correction("a", GUESS, {"category": "Еда"}, "system-seed", 0.3)
    store.record_correction("b", GUESS, {"category": "Транспорт"}, "user-1", 0.8)
    store.record_correction("c", GUESS, {"category": "Еда"}, "user-1", 0.8)

    assert [r.original_text for r in store.list_corrections(CorrectionFilter(source="user-1"))] == ["b", "c"]
    assert [r.original_text for r in store.list_corrections(CorrectionFilter(category="Еда"))] == ["a", "c"]

    future = datetime.now(timezone.utc) + timedelta(days=1)
    assert list(store.list_corrections(CorrectionFilter(since=future))) == []
    assert len(list(store.list_corrections(CorrectionFilter(until=future)))) == 3


def test_corrupt_line_raises_storage_error(store):
    store.record_correction("a", GUESS, {"category": "Еда"}, "u", 0.5)
    with store.path.open("a", encoding="utf-8") as f:
        f.write("{not json\n")

    with pytest.raises(StorageError, match=":2"):
        list(store.list_corrections())


def test_unwritable_path_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("i am a file")
    store = JsonlCorrectionStore(blocker / "learning-data.jsonl")

    with pytest.raises(StorageError):
        store.record_correction("a", GUESS, {"category": "Еда"}, "u", 0.5)


def test_unencodable_text_raises_storage_error_and_leaves_log_intact(store):
    store.record_correction("a", GUESS, {"category": "Еда"}, "u", 0.5)

    with pytest.raises(StorageError):
        store.record_correction("bad \ud800", {}, {"category": "Еда"}, "u", 0.5)

    assert [r.original_text for r in store.list_corrections()] == ["a"]


def test_concurrent_appends_do_not_interleave(store):
    def worker(n):
        for i in range(20):
            store.record_correction(f"t{n}-{i}", GUESS, {"category": "Еда"}, f"user-{n}", 0.5)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = list(store.list_corrections())
    assert len(records) == 100
    assert len({r.original_text for r in records}) == 100


def test_empty_source_rejected(store):
    with pytest.raises(ValueError):
        store.record_correction("a", GUESS, {"category": "Еда"}, "", 0.5)


def test_seed_patterns_written_once(store):
    assert create_seed_patterns(store) == len(SEED_CORRECTIONS)
    assert create_seed_patterns(store) == 0

    seeded = list(store.list_corrections(CorrectionFilter(source=SEED_SOURCE)))
    assert len(seeded) == len(SEED_CORRECTIONS)
    assert {r.corrected_fields.category for r in seeded} == {"Еда", "Транспорт"}
