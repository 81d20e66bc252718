"""Mini README: Tests for JSON persistence and debounced autosave.

Structure:
    * missing or corrupt blobs fall back to the built-in defaults
    * saved snapshots load back unchanged
    * bursts of mutations collapse into a single deferred write
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Callable, List

from fundtrack.records import RecordStore
from fundtrack.records.defaults import DEFAULT_CATEGORIES, default_transactions
from fundtrack.storage import DebouncedAutosave, JsonLedgerRepository


class FakeTimer:
    """Stand-in for ``threading.Timer`` that only fires when told to."""

    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.function()


def test_missing_files_yield_defaults(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)

    assert repository.load_transactions() == default_transactions()
    assert len(repository.load_diesel_logs()) == 3
    assert repository.load_categories() == list(DEFAULT_CATEGORIES)


def test_corrupt_or_malformed_blobs_yield_defaults(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)
    repository.transactions_path.write_text("{not json", encoding="utf-8")
    repository.diesel_logs_path.write_text(json.dumps({"id": "d1"}), encoding="utf-8")
    repository.categories_path.write_text(json.dumps(["Food", 42]), encoding="utf-8")

    assert repository.load_transactions() == default_transactions()
    assert len(repository.load_diesel_logs()) == 3
    assert repository.load_categories() == list(DEFAULT_CATEGORIES)


def test_record_failing_validation_replaces_whole_blob(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)
    payload = [
        {"id": "1", "date": "2025-12-01", "description": "OK", "amount": 10, "type": "fund", "mode": "BDO", "category": "X"},
        {"id": "2", "date": "2025-12-01", "description": "BAD SIGN", "amount": 10, "type": "expense", "mode": "BDO", "category": "X"},
    ]
    repository.transactions_path.write_text(json.dumps(payload), encoding="utf-8")

    assert repository.load_transactions() == default_transactions()


def test_oversized_amount_replaces_whole_blob(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)
    payload = [
        {"id": "1", "date": "2025-12-01", "description": "HUGE", "amount": 1e30, "type": "fund", "mode": "BDO", "category": "X"},
    ]
    repository.transactions_path.write_text(json.dumps(payload), encoding="utf-8")

    assert repository.load_transactions() == default_transactions()
    assert len(repository.load_store().transactions) == len(default_transactions())


def test_snapshot_round_trips_through_disk(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)
    store = RecordStore(transactions=[], diesel_logs=[], categories=["Food"])
    store.add_transaction(
        occurred_on="2025-12-02",
        description="lunch",
        amount="123.45",
        transaction_type="expense",
        account="Cash",
        category="Food",
    )
    store.add_diesel_log(
        occurred_on="2025-12-02", amount="900", vehicle="truck 1", area_code="lipa", assigned_staff="ana"
    )

    repository.save_snapshot(store.snapshot())
    loaded = repository.load_store()

    assert loaded.transactions == store.transactions
    assert loaded.diesel_logs == store.diesel_logs
    assert loaded.categories == ("Food",)
    stored = json.loads(repository.transactions_path.read_text(encoding="utf-8"))
    assert stored[0]["amount"] == -123.45
    assert set(stored[0]) == {"id", "date", "description", "amount", "type", "mode", "category"}
    assert "areaCode" in json.loads(repository.diesel_logs_path.read_text(encoding="utf-8"))[0]


def test_empty_lists_are_kept_rather_than_reseeded(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)
    repository.save_snapshot(RecordStore(transactions=[], diesel_logs=[], categories=[]).snapshot())

    loaded = repository.load_store()

    assert loaded.transactions == ()
    assert loaded.categories == ()


def test_autosave_debounces_bursts_into_one_write(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)
    store = RecordStore(transactions=[], diesel_logs=[], categories=[])
    timers: List[FakeTimer] = []

    def factory(interval: float, function: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        timers.append(timer)
        return timer

    autosave = DebouncedAutosave(store, repository, delay=1.5, timer_factory=factory)
    store.add_category("Food")
    store.add_category("Rent")
    store.add_category("Fuel")

    assert len(timers) == 3
    assert [timer.cancelled for timer in timers] == [True, True, False]
    assert all(timer.daemon and timer.interval == 1.5 for timer in timers)
    assert not repository.categories_path.exists()

    timers[-1].fire()

    assert json.loads(repository.categories_path.read_text(encoding="utf-8")) == ["Food", "Rent", "Fuel"]
    assert autosave.pending is False
    assert autosave.last_saved_at is not None


def test_autosave_close_flushes_pending_state(tmp_path: Path) -> None:
    repository = JsonLedgerRepository(tmp_path)
    store = RecordStore(transactions=[], diesel_logs=[], categories=[])
    autosave = DebouncedAutosave(store, repository, delay=60, timer_factory=FakeTimer)

    store.add_transaction(
        occurred_on="2025-12-01",
        description="fund",
        amount="10",
        transaction_type="fund",
        account="BDO",
        category="Fund Transfer",
    )
    autosave.close()
    store.add_category("After close")

    loaded = repository.load_store()
    assert loaded.transactions[0].amount == Decimal("10.00")
    assert loaded.categories == ()
    assert autosave.pending is False


def test_autosave_survives_write_failures(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    repository = JsonLedgerRepository(blocker)
    store = RecordStore(transactions=[], diesel_logs=[], categories=[])
    autosave = DebouncedAutosave(store, repository, delay=0, timer_factory=FakeTimer)

    assert autosave.flush() is False
    assert autosave.last_saved_at is None
