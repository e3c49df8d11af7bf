"""Read-only vocabulary content."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Difficulty(Enum):
    """How hard a word is for a beginner."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Word:
    """A single flashcard."""
    id: int
    category_id: int
    text: str
    translation: str
    pinyin: str = ""
    example: str = ""
    example_translation: str = ""
    difficulty: Difficulty = Difficulty.EASY


@dataclass(frozen=True)
class Category:
    """A named, fixed group of words."""
    id: int
    name: str
    description: str = ""
    words: List[Word] = field(default_factory=list)

    @property
    def word_ids(self) -> List[int]:
        return [word.id for word in self.words]

    @property
    def word_count(self) -> int:
        return len(self.words)
