"""Business logic for picking and adding trivia questions."""
import logging
import random
import uuid
from typing import Dict, List, Optional

from ..errors import CategoryNotFoundError
from ..repositories.question_repository import QuestionRepository


class QuestionService:
    """Picks random questions and appends new ones, delegating persistence
    to :class:`~quiz.repositories.question_repository.QuestionRepository`.

    Rules
    -----
    * Category names are expected lowercase; callers normalise them.
    * An empty category is treated exactly like an absent one.
    * Questions are returned unchanged, answer and link included.
    * ``options`` and ``answer`` are stored as given; nothing checks that the
      answer letter matches one of the options.
    """

    def __init__(self, repository: QuestionRepository) -> None:
        self._repo = repository
        self._log = logging.getLogger('quizgame.service.QuestionService')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_categories(self) -> List[str]:
        """Return every category name in document order."""
        with self._repo.lock:
            return self._repo.categories()

    def get_question(self, category: str) -> Dict:
        """Return a uniformly random question from *category*.

        Raises:
            CategoryNotFoundError: If the category is absent or empty.
        """
        with self._repo.lock:
            questions = self._repo.find_category(category)
            if not questions:
                self._log.info("No questions for category %r", category)
                raise CategoryNotFoundError(category)
            return random.choice(questions)

    def add_question(self, category: str, question: str, options: List,
                     answer: str, link: Optional[str] = None) -> Dict:
        """Append a new question to *category* and persist the document.

        The category is created when it does not exist yet.

        Returns:
            The stored question record, including its generated ``id``.
        """
        record: Dict = {
            'id': str(uuid.uuid4()),
            'question': question,
            'options': options,
            'answer': answer,
        }
        if link:
            record['link'] = link
        with self._repo.lock:
            self._repo.append(category, record)
        self._log.info("Added question %s to category %r", record['id'], category)
        return record
