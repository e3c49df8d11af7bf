"""Achievements derived from a progress snapshot."""
from dataclasses import dataclass
from typing import List

from wordcards.models.progress_models import ProgressSnapshot
from wordcards.services.catalog_service import ContentCatalog


@dataclass
class Achievement:
    """A milestone and how close the learner is to it."""
    key: str
    title: str
    description: str
    target: int
    progress: int

    @property
    def unlocked(self) -> bool:
        return self.progress >= self.target


# (key, title, description, counter, target)
MILESTONES = [
    ("first_word", "Beginner", "Learned the first word", "total_words", 1),
    ("word_collector", "Word Collector", "Learned 10 words", "total_words", 10),
    ("vocabulary_master", "Vocabulary Master", "Learned 50 words", "total_words", 50),
    ("persistent", "Persistent", "Studied on 3 days", "studied_days", 3),
    ("dedicated", "Dedicated Learner", "Studied on 7 days", "studied_days", 7),
]


class AchievementService:
    """Evaluate milestones against the learner's progress."""

    def __init__(self, catalog: ContentCatalog):
        self.catalog = catalog

    def evaluate(self, snapshot: ProgressSnapshot) -> List[Achievement]:
        achievements = [
            Achievement(
                key=key,
                title=title,
                description=description,
                target=target,
                progress=min(getattr(snapshot, counter), target),
            )
            for key, title, description, counter, target in MILESTONES
        ]
        achievements.append(Achievement(
            key="category_star",
            title="Category Star",
            description="Learned every word of a category",
            target=1,
            progress=1 if self.completed_categories(snapshot) else 0,
        ))
        return achievements

    def completed_categories(self, snapshot: ProgressSnapshot) -> List[int]:
        """Categories where every catalog word is learned.

        Uses the catalog word count, not the tracked-word percentage, which
        reaches 100% as soon as every touched word is learned.
        """
        completed = []
        for category in snapshot.categories:
            catalog_category = self.catalog.get_category(category.category_id)
            if catalog_category is None or not catalog_category.words:
                continue
            if set(catalog_category.word_ids) <= set(category.learned_word_ids):
                completed.append(category.category_id)
        return completed
