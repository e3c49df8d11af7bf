"""Multiple-choice quizzes over a category's words."""
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from wordcards.exceptions import UnknownCategory
from wordcards.services.catalog_service import ContentCatalog

logger = logging.getLogger(__name__)

WRONG_OPTIONS = 3
PASS_PERCENTAGE = 70


@dataclass
class QuizQuestion:
    """One word to translate with its shuffled options."""
    word_id: int
    prompt: str
    options: List[str]
    answer: str


@dataclass
class QuizSession:
    """Answers given so far for one quiz."""
    category_id: int
    questions: List[QuizQuestion]
    current: int = 0
    score: int = 0
    answers: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def finished(self) -> bool:
        return self.current >= self.total

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        return None if self.finished else self.questions[self.current]

    @property
    def percentage(self) -> int:
        if not self.total:
            return 0
        return (200 * self.score + self.total) // (2 * self.total)

    @property
    def passed(self) -> bool:
        return self.finished and self.percentage >= PASS_PERCENTAGE

    def answer(self, option: str) -> bool:
        """Answer the current question and move on; returns whether it was right."""
        question = self.current_question
        if question is None:
            raise ValueError("Quiz is already finished")
        correct = option == question.answer
        if correct:
            self.score += 1
        self.answers.append(option)
        self.current += 1
        return correct


class QuizService:
    """Build quizzes from the catalog. Quizzes never write progress."""

    def __init__(self, catalog: ContentCatalog, rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.rng = rng or random.Random()

    def build_quiz(self, category_id: int) -> QuizSession:
        """Create one question per word in the category.

        Raises:
            UnknownCategory: the category is not in the catalog.
        """
        category = self.catalog.get_category(category_id)
        if category is None:
            raise UnknownCategory(category_id)

        words = list(category.words)
        questions = []
        for word in words:
            distractors = sorted({
                other.translation for other in words
                if other.id != word.id and other.translation != word.translation
            })
            self.rng.shuffle(distractors)
            options = [word.translation] + distractors[:WRONG_OPTIONS]
            self.rng.shuffle(options)
            questions.append(QuizQuestion(
                word_id=word.id,
                prompt=word.text,
                options=options,
                answer=word.translation,
            ))
        logger.debug(f"Quiz built for category {category_id} with {len(questions)} questions")
        return QuizSession(category_id=category_id, questions=questions)
