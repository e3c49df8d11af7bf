"""Tests for the progress store."""
from datetime import UTC, date, datetime
from unittest.mock import Mock

import pytest
from faker import Faker
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wordcards.exceptions import InvalidReference, ProgressNotFound
from wordcards.models.models import AccountProgress, CategoryProgress, WordProgress
from wordcards.services.progress_store import ProgressStore, percent

fake = Faker()


@pytest.fixture
def account_id() -> str:
    return fake.uuid4()


def test_percent_rounds_halves_up() -> None:
    """Test whole-number percentages."""
    assert percent(1, 3) == 33
    assert percent(2, 3) == 67
    assert percent(1, 8) == 13
    assert percent(1, 2) == 50
    assert percent(3, 3) == 100
    assert percent(0, 5) == 0
    assert percent(0, 0) == 0


def test_load_unknown_account(store: ProgressStore, account_id: str) -> None:
    """Test that an account without progress is reported as not found."""
    with pytest.raises(ProgressNotFound) as exc_info:
        store.load(account_id)
    assert exc_info.value.account_id == account_id


def test_upsert_word_creates_rows(store: ProgressStore, db: Session, account_id: str) -> None:
    """Test that the first mark creates the category and word rows."""
    word = store.upsert_word(account_id, 1, 1, "Basics")

    assert word.learned is True
    assert word.review_count == 1
    assert word.last_review_date is not None

    category = db.get(CategoryProgress, (account_id, 1))
    assert category is not None
    assert category.name == "Basics"
    assert category.progress == 0  # Only recompute_category sets it


def test_upsert_word_again_increments_review_count(
    store: ProgressStore, clock, account_id: str
) -> None:
    """Test that marking an already learned word counts a review."""
    first = store.upsert_word(account_id, 1, 1, "Basics")
    first_review = first.last_review_date.replace(tzinfo=None)

    clock.advance(minutes=5)
    second = store.upsert_word(account_id, 1, 1, "Basics")

    assert second.learned is True
    assert second.review_count == 2
    assert second.last_review_date.replace(tzinfo=None) > first_review

    third = store.upsert_word(account_id, 1, 1, "Basics")
    assert third.review_count == 3


def test_upsert_word_keeps_original_category_name(
    store: ProgressStore, db: Session, account_id: str
) -> None:
    """Test that the category name is captured once."""
    store.upsert_word(account_id, 1, 1, "Basics")
    store.upsert_word(account_id, 1, 2, "Renamed")

    assert db.get(CategoryProgress, (account_id, 1)).name == "Basics"


def test_upsert_word_rejects_word_from_other_category(
    store: ProgressStore, db: Session, account_id: str
) -> None:
    """Test catalog validation of word and category ids."""
    with pytest.raises(InvalidReference):
        store.upsert_word(account_id, 1, 9, "Basics")  # Word 9 is in Numbers
    with pytest.raises(InvalidReference):
        store.upsert_word(account_id, 1, 999, "Basics")

    assert db.query(WordProgress).count() == 0
    assert db.query(CategoryProgress).count() == 0


def test_recompute_category_uses_tracked_words(
    store: ProgressStore, db: Session, clock, account_id: str
) -> None:
    """Test that the denominator is the tracked row count, not the catalog size."""
    store.upsert_word(account_id, 1, 1, "Basics")
    category = store.recompute_category(account_id, 1)
    assert category.progress == 100  # 1 of 1 tracked, catalog has 8

    # Tracked but not learned rows only come from outside the normal write path
    db.add_all([
        WordProgress(account_id=account_id, category_id=1, word_id=2, learned=False,
                     review_count=1, last_review_date=clock()),
        WordProgress(account_id=account_id, category_id=1, word_id=3, learned=False,
                     review_count=1, last_review_date=clock()),
    ])
    db.commit()

    assert store.recompute_category(account_id, 1).progress == 33

    store.upsert_word(account_id, 1, 2, "Basics")
    assert store.recompute_category(account_id, 1).progress == 67


def test_recompute_category_without_rows(store: ProgressStore, account_id: str) -> None:
    with pytest.raises(ProgressNotFound):
        store.recompute_category(account_id, 1)


def test_touch_account_day_counts_calendar_days(
    store: ProgressStore, clock, account_id: str
) -> None:
    """Test studied_days on first, same-day and next-day events."""
    account = store.touch_account_day(account_id)
    assert account.studied_days == 1
    assert account.last_study_date == date(2024, 3, 10)

    clock.advance(hours=10)
    account = store.touch_account_day(account_id)
    assert account.studied_days == 1

    clock.advance(days=1)
    account = store.touch_account_day(account_id)
    assert account.studied_days == 2
    assert account.last_study_date == date(2024, 3, 11)


def test_touch_account_day_ignores_earlier_dates(
    store: ProgressStore, clock, account_id: str
) -> None:
    """Test that a clock moving backwards never counts a day."""
    store.touch_account_day(account_id)
    clock.advance(days=-2)

    account = store.touch_account_day(account_id)

    assert account.studied_days == 1
    assert account.last_study_date == date(2024, 3, 10)


def test_touch_account_day_uses_study_timezone(
    db: Session, catalog, clock, account_id: str
) -> None:
    """Test that the calendar day follows the configured time zone."""
    clock.now = datetime(2024, 3, 10, 17, 0, tzinfo=UTC)
    store = ProgressStore(db, catalog=catalog, clock=clock, timezone="Asia/Shanghai")

    account = store.touch_account_day(account_id)

    assert account.last_study_date == date(2024, 3, 11)


def test_touch_account_day_refreshes_total_words(
    store: ProgressStore, account_id: str
) -> None:
    """Test that total_words equals the learned word rows."""
    store.upsert_word(account_id, 1, 1, "Basics")
    store.upsert_word(account_id, 2, 9, "Numbers")
    store.upsert_word(account_id, 2, 9, "Numbers")

    account = store.touch_account_day(account_id)

    assert account.total_words == 2


def test_load_returns_all_rows(store: ProgressStore, account_id: str) -> None:
    """Test loading a full snapshot."""
    store.upsert_word(account_id, 2, 10, "Numbers")
    store.upsert_word(account_id, 1, 1, "Basics")
    store.recompute_category(account_id, 1)
    store.recompute_category(account_id, 2)
    store.touch_account_day(account_id)

    stored = store.load(account_id)

    assert stored.account.total_words == 2
    assert [category.category_id for category in stored.categories] == [1, 2]
    assert [word.word_id for word in stored.categories[1].words] == [10]


def test_accounts_are_isolated(store: ProgressStore) -> None:
    """Test that rows of one account never show up for another."""
    first, second = fake.uuid4(), fake.uuid4()
    store.upsert_word(first, 1, 1, "Basics")
    store.upsert_word(first, 1, 2, "Basics")
    store.touch_account_day(first)
    store.upsert_word(second, 1, 1, "Basics")
    store.touch_account_day(second)

    assert store.load(first).account.total_words == 2
    assert store.load(second).account.total_words == 1
    assert store.get_word(second, 1, 2) is None
    assert store.get_word(second, 1, 1).review_count == 1


def test_recompute_account_total(store: ProgressStore, db: Session, account_id: str) -> None:
    """Test repairing a stale total."""
    store.upsert_word(account_id, 1, 1, "Basics")
    store.touch_account_day(account_id)
    db.get(AccountProgress, account_id).total_words = 42
    db.commit()

    assert store.recompute_account_total(account_id).total_words == 1

    with pytest.raises(ProgressNotFound):
        store.recompute_account_total(fake.uuid4())


def test_write_retries_once_after_lost_insert_race(store: ProgressStore) -> None:
    """Test that a concurrent insert is replayed as an update."""
    apply = Mock(side_effect=[IntegrityError("INSERT", {}, Exception("duplicate")), "updated"])

    assert store._write("upsert_word", apply) == "updated"
    assert apply.call_count == 2


def test_write_propagates_second_failure(store: ProgressStore) -> None:
    apply = Mock(side_effect=IntegrityError("INSERT", {}, Exception("duplicate")))

    with pytest.raises(IntegrityError):
        store._write("upsert_word", apply)
    assert apply.call_count == 2
