"""Repository for trivia questions ({category: [question, ...]})."""
from typing import Dict, List, Optional

from .base import BaseRepository


class QuestionRepository(BaseRepository):
    """Holds the questions document in memory and persists it to JSON.

    Schema::

        {
            "<category>": [
                {
                    "id":       <str>,
                    "question": <str>,
                    "options":  [<str>, ...],
                    "answer":   <str, one letter>,
                    "link":     <str, optional>
                }
            ]
        }

    Category keys are stored lowercase by the callers; the repository does
    not normalise them.
    """

    def __init__(self, file_path: str = 'questions.json') -> None:
        super().__init__(file_path)
        self.data: Dict[str, List[Dict]] = self._load()

    def categories(self) -> List[str]:
        """Return the category names in document order."""
        return list(self.data)

    def find_category(self, category: str) -> Optional[List[Dict]]:
        """Return the question list for *category*, or ``None``."""
        return self.data.get(category)

    def append(self, category: str, record: Dict) -> None:
        """Append *record* to *category* (creating it if needed), then persist."""
        self.data.setdefault(category, []).append(record)
        self.save()

    def save(self) -> None:
        """Persist the current in-memory data to disk."""
        self._save(self.data)
