"""Exceptions raised by the quiz repositories and services."""


class QuizError(Exception):
    """Base class for every error raised by the quiz package."""


class StoreLoadError(QuizError):
    """Raised when a JSON document cannot be loaded at startup."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f'Could not load {path}: {reason}')
        self.path = path


class NotFoundError(QuizError):
    """Raised when a lookup finds nothing."""


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is absent or holds no questions."""

    def __init__(self, category: str) -> None:
        super().__init__(f'No questions found for category "{category}".')
        self.category = category


class PlayerNotFoundError(NotFoundError):
    """Raised when no year of the leaderboard holds the player id."""

    def __init__(self, player_id: str) -> None:
        super().__init__(f'Player with id "{player_id}" not found.')
        self.player_id = player_id
