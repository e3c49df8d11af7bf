"""Durable per-account learning progress.

The store owns the three progress tables and is the only code that writes
them. Every write method commits before returning, so the next step of a
use-case always reads what the previous step stored. Aggregates
(category percentages, account totals) are recomputed from the current
row set with fresh queries instead of being adjusted incrementally; a
recompute after an interrupted or interleaved write converges on the same
value.
"""
import logging
from datetime import UTC, date, datetime
from typing import Callable, List, Optional, Tuple, TypeVar
from zoneinfo import ZoneInfo

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from wordcards.config import settings
from wordcards.exceptions import ProgressNotFound
from wordcards.models.models import AccountProgress, CategoryProgress, WordProgress
from wordcards.models.progress_models import StoredProgress
from wordcards.monitoring import store_operations, study_days_started
from wordcards.services.catalog_service import ContentCatalog, get_catalog

logger = logging.getLogger(__name__)

T = TypeVar("T")


def percent(learned: int, tracked: int) -> int:
    """Whole-number percentage, rounding halves up."""
    if tracked <= 0:
        return 0
    return (200 * learned + tracked) // (2 * tracked)


class ProgressStore:
    """Read and upsert operations over account, category and word progress."""

    def __init__(
        self,
        db: Session,
        catalog: Optional[ContentCatalog] = None,
        clock: Optional[Callable[[], datetime]] = None,
        timezone: Optional[str] = None,
    ):
        """Initialize the store with a database session."""
        self.db = db
        self.catalog = catalog or get_catalog()
        self.clock = clock or (lambda: datetime.now(UTC))
        self.timezone = ZoneInfo(timezone or settings.progress.timezone)

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        """Current calendar day in the configured study time zone."""
        return self.now().astimezone(self.timezone).date()

    def _write(self, operation: str, apply: Callable[[], T]) -> T:
        """Apply changes and commit, replaying once as an update if an insert lost a race."""
        store_operations.labels(operation_type=operation).inc()
        try:
            try:
                result = apply()
                self.db.commit()
            except IntegrityError:
                # Another writer created the row between our read and insert
                self.db.rollback()
                logger.debug(f"{operation}: concurrent insert detected, retrying as update")
                result = apply()
                self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return result

    def load(self, account_id: str) -> StoredProgress:
        """Get account totals with all category and word rows.

        Raises:
            ProgressNotFound: the account has no progress yet.
        """
        store_operations.labels(operation_type="load").inc()
        account = self.db.get(AccountProgress, account_id)
        if account is None:
            raise ProgressNotFound(account_id)
        return StoredProgress(account=account, categories=self.list_categories(account_id))

    def list_categories(self, account_id: str) -> List[CategoryProgress]:
        return (
            self.db.query(CategoryProgress)
            .filter(CategoryProgress.account_id == account_id)
            .order_by(CategoryProgress.category_id)
            .all()
        )

    def get_category(self, account_id: str, category_id: int) -> Optional[CategoryProgress]:
        return self.db.get(CategoryProgress, (account_id, category_id))

    def get_word(self, account_id: str, category_id: int, word_id: int) -> Optional[WordProgress]:
        return self.db.get(WordProgress, (account_id, category_id, word_id))

    def upsert_word(
        self,
        account_id: str,
        category_id: int,
        word_id: int,
        category_name: str,
    ) -> WordProgress:
        """Mark a word learned, creating its category row when needed.

        A new row starts with review_count=1. An existing row keeps
        learned=True, gets review_count incremented and last_review_date
        refreshed.

        Raises:
            InvalidReference: the word does not belong to the category.
        """
        self.catalog.validate_reference(category_id, word_id)

        def apply() -> WordProgress:
            reviewed_at = self.now()
            category = self.get_category(account_id, category_id)
            if category is None:
                category = CategoryProgress(
                    account_id=account_id,
                    category_id=category_id,
                    name=category_name,
                    progress=0,
                )
                self.db.add(category)

            word = self.get_word(account_id, category_id, word_id)
            if word is None:
                word = WordProgress(
                    account_id=account_id,
                    category_id=category_id,
                    word_id=word_id,
                    learned=True,
                    review_count=1,
                    last_review_date=reviewed_at,
                )
                self.db.add(word)
                logger.debug(f"Account {account_id}: new word {word_id} in category {category_id}")
            else:
                word.learned = True
                # Incremented in SQL so concurrent marks are not lost
                word.review_count = WordProgress.review_count + 1
                word.last_review_date = reviewed_at
                logger.debug(f"Account {account_id}: word {word_id} reviewed again")
            return word

        return self._write("upsert_word", apply)

    def recompute_category(self, account_id: str, category_id: int) -> CategoryProgress:
        """Recalculate a category percentage from its tracked word rows.

        Raises:
            ProgressNotFound: no word in this category was ever tracked.
        """

        def apply() -> CategoryProgress:
            category = self.get_category(account_id, category_id)
            if category is None:
                raise ProgressNotFound(account_id)

            tracked = self._count_words(account_id, category_id)
            learned = self._count_words(account_id, category_id, learned_only=True)
            category.progress = percent(learned, tracked)
            logger.debug(
                f"Account {account_id}: category {category_id} at {category.progress}% "
                f"({learned}/{tracked})"
            )
            return category

        return self._write("recompute_category", apply)

    def touch_account_day(self, account_id: str) -> AccountProgress:
        """Record a study event today and refresh the account's word total.

        studied_days grows by one only on the first call of a calendar day
        that is later than last_study_date. The account row is created on
        first use.
        """
        today = self.today()

        def apply() -> Tuple[AccountProgress, bool]:
            account = self.db.get(AccountProgress, account_id)
            if account is None:
                account = AccountProgress(
                    account_id=account_id,
                    studied_days=1,
                    last_study_date=today,
                    total_words=0,
                )
                self.db.add(account)
                self.db.flush()
                new_day = True
            else:
                # Compare-and-set so two same-day writers count the day once
                updated = (
                    self.db.query(AccountProgress)
                    .filter(
                        AccountProgress.account_id == account_id,
                        or_(
                            AccountProgress.last_study_date.is_(None),
                            AccountProgress.last_study_date < today,
                        ),
                    )
                    .update(
                        {
                            AccountProgress.studied_days: AccountProgress.studied_days + 1,
                            AccountProgress.last_study_date: today,
                        },
                        synchronize_session=False,
                    )
                )
                new_day = updated > 0
            account.total_words = self._count_learned(account_id)
            return account, new_day

        account, new_day = self._write("touch_account_day", apply)
        if new_day:
            study_days_started.inc()
            logger.info(f"Account {account_id}: new study day {today}")
        return account

    def recompute_account_total(self, account_id: str) -> AccountProgress:
        """Reset total_words to the number of learned word rows.

        Raises:
            ProgressNotFound: the account has no progress yet.
        """

        def apply() -> AccountProgress:
            account = self.db.get(AccountProgress, account_id)
            if account is None:
                raise ProgressNotFound(account_id)
            account.total_words = self._count_learned(account_id)
            return account

        return self._write("recompute_account_total", apply)

    def _count_words(self, account_id: str, category_id: int, learned_only: bool = False) -> int:
        query = self.db.query(func.count(WordProgress.word_id)).filter(
            WordProgress.account_id == account_id,
            WordProgress.category_id == category_id,
        )
        if learned_only:
            query = query.filter(WordProgress.learned.is_(True))
        return query.scalar() or 0

    def _count_learned(self, account_id: str) -> int:
        return (
            self.db.query(func.count(WordProgress.word_id))
            .filter(
                WordProgress.account_id == account_id,
                WordProgress.learned.is_(True),
            )
            .scalar()
            or 0
        )
