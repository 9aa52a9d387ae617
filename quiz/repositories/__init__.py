"""Repository package: expose all concrete repositories from one import."""
from .base import BaseRepository
from .question_repository import QuestionRepository
from .leaderboard_repository import LeaderboardRepository

__all__ = [
    'BaseRepository',
    'QuestionRepository',
    'LeaderboardRepository',
]
