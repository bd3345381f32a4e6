import json
import threading
from datetime import datetime, timezone

import pytest

from pressurewash.errors import DuplicateQuoteId, StorageFailure
from pressurewash.models import QuoteSubmission
from pressurewash.pricing import estimate
from pressurewash.repository import InMemoryQuoteStore, JsonFileQuoteStore, QuoteRepository


def make_submission(**overrides):
    fields = {
        "address": "12 Elm St",
        "name": "Pat Doe",
        "phone": "(260) 555-1234",
        "service": "House Wash",
        "size": "Large",
        "condition": "Heavy",
    }
    fields.update(overrides)
    return QuoteSubmission(**fields)


def test_create_then_get_matches_estimate(repo):
    quote = repo.create(make_submission())

    fetched = repo.get_by_id(quote.id)
    assert fetched == quote

    expected = estimate("House Wash", "Large", "Heavy")
    assert (fetched.estimate_low, fetched.estimate_high) == (expected.low, expected.high)
    assert fetched.created_at.tzinfo is not None


def test_get_unknown_id_returns_none(repo):
    assert repo.get_by_id("nope") is None
    repo.create(make_submission())
    assert repo.get_by_id("nope") is None


def test_file_is_newest_first_with_camelcase_keys(repo, quotes_path):
    first = repo.create(make_submission(name="First"))
    second = repo.create(make_submission(name="Second"))

    records = json.loads(quotes_path.read_text(encoding="utf-8"))
    assert [r["id"] for r in records] == [second.id, first.id]
    assert set(records[0]) == {
        "id", "createdAt", "address", "name", "phone", "service",
        "size", "condition", "estimateLow", "estimateHigh",
    }
    assert [q.id for q in repo.list_quotes()] == [second.id, first.id]


def test_missing_file_reads_as_empty(repo, quotes_path):
    assert not quotes_path.exists()
    assert repo.list_quotes() == []


def test_corrupt_file_is_a_storage_failure(repo, quotes_path):
    quotes_path.parent.mkdir(parents=True)
    quotes_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageFailure):
        repo.get_by_id("anything")
    with pytest.raises(StorageFailure):
        repo.create(make_submission())
    assert quotes_path.read_text(encoding="utf-8") == "{not json"


def test_non_list_file_is_a_storage_failure(repo, quotes_path):
    quotes_path.parent.mkdir(parents=True)
    quotes_path.write_text('{"id": "x"}', encoding="utf-8")
    with pytest.raises(StorageFailure):
        repo.list_quotes()


def test_unwritable_location_is_a_storage_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    repo = QuoteRepository(JsonFileQuoteStore(blocker / "quotes.json"))
    with pytest.raises(StorageFailure):
        repo.create(make_submission())


def test_duplicate_id_is_rejected_by_store():
    store = InMemoryQuoteStore()
    repo = QuoteRepository(store, id_factory=lambda: "fixed")
    quote = repo.create(make_submission())
    with pytest.raises(DuplicateQuoteId):
        store.put(quote)
    with pytest.raises(DuplicateQuoteId):
        repo.create(make_submission())
    assert len(store.list()) == 1


def test_id_collision_is_retried_with_a_new_id(quotes_path):
    ids = iter(["taken", "taken", "fresh"])
    repo = QuoteRepository(JsonFileQuoteStore(quotes_path), id_factory=lambda: next(ids))
    repo.create(make_submission())

    quote = repo.create(make_submission())
    assert quote.id == "fresh"
    assert [q.id for q in repo.list_quotes()] == ["fresh", "taken"]


def test_clock_stamps_created_at():
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    repo = QuoteRepository(InMemoryQuoteStore(), clock=lambda: stamp)
    assert repo.create(make_submission()).created_at == stamp


def test_listed_quotes_are_copies(repo):
    repo.create(make_submission())
    listed = repo.list_quotes()
    listed.clear()
    assert len(repo.list_quotes()) == 1


@pytest.mark.parametrize("store_kind", ["json", "memory"])
def test_concurrent_creates_keep_every_record(quotes_path, store_kind):
    store = JsonFileQuoteStore(quotes_path) if store_kind == "json" else InMemoryQuoteStore()
    repo = QuoteRepository(store)
    workers = 16
    barrier = threading.Barrier(workers)
    created = []
    errors = []

    def submit(n):
        barrier.wait()
        try:
            created.append(repo.create(make_submission(name=f"Customer {n}")))
        except Exception as e:  # surfaced by the assertion below
            errors.append(e)

    threads = [threading.Thread(target=submit, args=(n,)) for n in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    ids = {q.id for q in created}
    assert len(ids) == workers
    assert {q.id for q in repo.list_quotes()} == ids
    for quote_id in ids:
        assert repo.get_by_id(quote_id) is not None
