"""Plain data structures handed out by the progress use-cases."""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from wordcards.models.models import AccountProgress, CategoryProgress, WordProgress


@dataclass(frozen=True)
class AccountContext:
    """Signed-in account, passed explicitly into every use-case call."""
    account_id: str
    email: Optional[str] = None
    username: Optional[str] = None
    token: Optional[str] = None


@dataclass
class WordSnapshot:
    """Learning state of one tracked word."""
    word_id: int
    learned: bool
    review_count: int
    last_review_date: Optional[datetime]

    @classmethod
    def from_row(cls, row: WordProgress) -> "WordSnapshot":
        return cls(
            word_id=row.word_id,
            learned=row.learned,
            review_count=row.review_count,
            last_review_date=row.last_review_date,
        )


@dataclass
class CategorySnapshot:
    """Completion of one category."""
    category_id: int
    name: str
    progress: int
    words: List[WordSnapshot] = field(default_factory=list)

    @property
    def learned_word_ids(self) -> List[int]:
        return [word.word_id for word in self.words if word.learned]

    @classmethod
    def from_row(cls, row: CategoryProgress) -> "CategorySnapshot":
        return cls(
            category_id=row.category_id,
            name=row.name,
            progress=row.progress,
            words=[WordSnapshot.from_row(word) for word in row.words],
        )


@dataclass
class ProgressSnapshot:
    """Everything recorded for one account."""
    account_id: str
    studied_days: int = 0
    last_study_date: Optional[date] = None
    total_words: int = 0
    categories: List[CategorySnapshot] = field(default_factory=list)

    @classmethod
    def empty(cls, account_id: str) -> "ProgressSnapshot":
        """Snapshot of a learner with no history."""
        return cls(account_id=account_id)

    def get_category(self, category_id: int) -> Optional[CategorySnapshot]:
        for category in self.categories:
            if category.category_id == category_id:
                return category
        return None


@dataclass
class StoredProgress:
    """Rows returned by ProgressStore.load for one account."""
    account: AccountProgress
    categories: List[CategoryProgress]

    def to_snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            account_id=self.account.account_id,
            studied_days=self.account.studied_days,
            last_study_date=self.account.last_study_date,
            total_words=self.account.total_words,
            categories=[CategorySnapshot.from_row(row) for row in self.categories],
        )
