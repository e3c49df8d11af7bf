"""Tests for database models."""
from datetime import UTC, datetime

import pytest
from faker import Faker
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wordcards.models.models import AccountProgress, CategoryProgress, WordProgress

fake = Faker()


def test_account_progress_defaults(db: Session) -> None:
    account = AccountProgress(account_id=fake.uuid4())
    db.add(account)
    db.commit()
    db.refresh(account)

    assert account.studied_days == 0
    assert account.total_words == 0
    assert account.last_study_date is None
    assert account.created_at is not None


def test_word_progress_requires_category_row(db: Session) -> None:
    """Test that a word row cannot exist without its category row."""
    db.add(WordProgress(
        account_id=fake.uuid4(),
        category_id=1,
        word_id=1,
        learned=True,
        review_count=1,
        last_review_date=datetime.now(UTC),
    ))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_category_words_relationship(db: Session) -> None:
    """Test word rows attached to their category in word order."""
    account_id = fake.uuid4()
    category = CategoryProgress(account_id=account_id, category_id=2, name="Numbers")
    db.add(category)
    for word_id in (12, 9):
        db.add(WordProgress(
            account_id=account_id,
            category_id=2,
            word_id=word_id,
            last_review_date=datetime.now(UTC),
        ))
    db.commit()
    db.refresh(category)

    assert [word.word_id for word in category.words] == [9, 12]
    assert all(word.learned and word.review_count == 1 for word in category.words)
    assert category.progress == 0
