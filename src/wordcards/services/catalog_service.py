"""Static vocabulary catalog."""
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from wordcards.data.vocabulary import CATEGORIES
from wordcards.exceptions import InvalidReference, UnknownCategory
from wordcards.models.catalog_models import Category, Difficulty, Word

logger = logging.getLogger(__name__)


class ContentCatalog:
    """Read-only lookup over categories and their words."""

    def __init__(self, raw_categories: List[Dict[str, Any]]):
        """Build the catalog from raw category dictionaries."""
        self._categories: Dict[int, Category] = {}
        self._words: Dict[int, Word] = {}

        for raw in raw_categories:
            words = [
                Word(
                    id=raw_word["id"],
                    category_id=raw["id"],
                    text=raw_word["text"],
                    translation=raw_word["translation"],
                    pinyin=raw_word.get("pinyin", ""),
                    example=raw_word.get("example", ""),
                    example_translation=raw_word.get("example_translation", ""),
                    difficulty=Difficulty(raw_word.get("difficulty", "easy")),
                )
                for raw_word in raw["words"]
            ]
            if raw["id"] in self._categories:
                raise ValueError(f"Duplicate category id {raw['id']}")
            for word in words:
                if word.id in self._words:
                    raise ValueError(f"Duplicate word id {word.id}")
                self._words[word.id] = word
            self._categories[raw["id"]] = Category(
                id=raw["id"],
                name=raw["name"],
                description=raw.get("description", ""),
                words=words,
            )

        logger.debug(f"Catalog loaded: {len(self._categories)} categories, {len(self._words)} words")

    def list_categories(self) -> List[Category]:
        """Get all categories in id order."""
        return [self._categories[key] for key in sorted(self._categories)]

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get(category_id)

    def get_word(self, word_id: int) -> Optional[Word]:
        return self._words.get(word_id)

    def words_in_category(self, category_id: int) -> List[Word]:
        category = self._categories.get(category_id)
        return list(category.words) if category else []

    def category_name(self, category_id: int) -> str:
        """Get a category name, raising UnknownCategory if it does not exist."""
        category = self._categories.get(category_id)
        if category is None:
            raise UnknownCategory(category_id)
        return category.name

    def validate_reference(self, category_id: int, word_id: int) -> Word:
        """Check that the word exists and belongs to the category."""
        word = self._words.get(word_id)
        if word is None or word.category_id != category_id:
            raise InvalidReference(category_id, word_id)
        return word


@lru_cache(maxsize=1)
def get_catalog() -> ContentCatalog:
    """Get the process-wide catalog built from the bundled vocabulary."""
    return ContentCatalog(CATEGORIES)
