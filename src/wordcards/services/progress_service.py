"""Progress use-cases: marking words learned and reading snapshots."""
import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

from wordcards.exceptions import ProgressNotFound, StoreUnavailable, WordCardsError
from wordcards.models.progress_models import (
    AccountContext,
    CategorySnapshot,
    ProgressSnapshot,
    WordSnapshot,
)
from wordcards.monitoring import (
    new_words_learned,
    progress_errors,
    use_case_duration,
    words_marked_learned,
)
from wordcards.services.catalog_service import ContentCatalog
from wordcards.services.progress_store import ProgressStore

logger = logging.getLogger(__name__)


class ProgressService:
    """Sequence store operations for the user-facing progress actions."""

    def __init__(self, store: ProgressStore, catalog: Optional[ContentCatalog] = None):
        """Initialize the service with a progress store."""
        self.store = store
        self.catalog = catalog or store.catalog

    @contextmanager
    def _use_case(self, name: str, account_id: str) -> Iterator[None]:
        """Time a use-case and translate storage failures into StoreUnavailable."""
        started = time.perf_counter()
        try:
            yield
        except SQLAlchemyError as e:
            progress_errors.labels(error_type=StoreUnavailable.__name__).inc()
            logger.error(f"{name} failed for account {account_id}: {e}")
            raise StoreUnavailable(f"Progress store unavailable during {name}") from e
        except WordCardsError as e:
            progress_errors.labels(error_type=type(e).__name__).inc()
            logger.warning(f"{name} rejected for account {account_id}: {e}")
            raise
        finally:
            use_case_duration.labels(use_case=name).observe(time.perf_counter() - started)

    def mark_word_learned(
        self,
        account: AccountContext,
        category_id: int,
        word_id: int,
    ) -> ProgressSnapshot:
        """Mark a word learned and return the refreshed snapshot.

        Safe to repeat: learned stays True and every repeat increments the
        word's review_count.

        Raises:
            UnknownCategory: the category is not in the catalog.
            InvalidReference: the word does not belong to the category.
            StoreUnavailable: the store failed; retrying the call is safe.
        """
        account_id = account.account_id
        with self._use_case("mark_word_learned", account_id):
            category_name = self.catalog.category_name(category_id)
            word = self.store.upsert_word(account_id, category_id, word_id, category_name)
            first_time = word.review_count == 1
            category = self.store.recompute_category(account_id, category_id)
            self.store.touch_account_day(account_id)
            snapshot = self.store.load(account_id).to_snapshot()

        words_marked_learned.inc()
        if first_time:
            new_words_learned.inc()
        logger.info(
            f"Account {account_id}: word {word_id} learned "
            f"(category {category_id} at {category.progress}%, total {snapshot.total_words})"
        )
        return snapshot

    def get_progress_snapshot(self, account: AccountContext) -> ProgressSnapshot:
        """Get everything recorded for the account.

        A learner with no history gets an empty snapshot, not an error.
        """
        account_id = account.account_id
        with self._use_case("get_progress_snapshot", account_id):
            try:
                return self.store.load(account_id).to_snapshot()
            except ProgressNotFound:
                logger.debug(f"Account {account_id}: no progress yet")
                return ProgressSnapshot.empty(account_id)

    def get_word_status(
        self,
        account: AccountContext,
        category_id: int,
        word_id: int,
    ) -> Optional[WordSnapshot]:
        """Get the learning state of one word, or None if never tracked."""
        with self._use_case("get_word_status", account.account_id):
            row = self.store.get_word(account.account_id, category_id, word_id)
            return WordSnapshot.from_row(row) if row else None

    def get_category_progress(
        self,
        account: AccountContext,
        category_id: int,
    ) -> Optional[CategorySnapshot]:
        with self._use_case("get_category_progress", account.account_id):
            row = self.store.get_category(account.account_id, category_id)
            return CategorySnapshot.from_row(row) if row else None

    def reconcile(self, account: AccountContext) -> ProgressSnapshot:
        """Recompute every aggregate of the account from its word rows.

        Repairs percentages or totals left stale by an interrupted
        mark_word_learned call.
        """
        account_id = account.account_id
        with self._use_case("reconcile", account_id):
            for category in self.store.list_categories(account_id):
                self.store.recompute_category(account_id, category.category_id)
            try:
                self.store.recompute_account_total(account_id)
            except ProgressNotFound:
                return ProgressSnapshot.empty(account_id)
            snapshot = self.store.load(account_id).to_snapshot()

        logger.info(f"Account {account_id}: progress reconciled, total {snapshot.total_words}")
        return snapshot
