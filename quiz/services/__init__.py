"""Services package: expose all concrete services from one import."""
from .question_service import QuestionService
from .score_service import ScoreService

__all__ = [
    'QuestionService',
    'ScoreService',
]
