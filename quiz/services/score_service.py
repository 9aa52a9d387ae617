"""Business logic for player scores and yearly leaderboards."""
import logging
from typing import Dict, List

from ..errors import PlayerNotFoundError
from ..repositories.leaderboard_repository import LeaderboardRepository

CORRECT = 'correct'


class ScoreService:
    """Adjusts player scores and reads yearly leaderboards, delegating
    persistence to
    :class:`~quiz.repositories.leaderboard_repository.LeaderboardRepository`.
    """

    def __init__(self, repository: LeaderboardRepository) -> None:
        self._repo = repository
        self._log = logging.getLogger('quizgame.service.ScoreService')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update_score(self, player_id: str, outcome: str) -> Dict:
        """Add one point for a ``"correct"`` outcome, remove one otherwise.

        Only the first record for *player_id* is changed (years in document
        order).  Scores may go below zero.  The whole leaderboard document is
        persisted after the change.

        Returns:
            The updated player record.

        Raises:
            PlayerNotFoundError: If no year holds *player_id*.  Nothing is
                written in that case.
        """
        with self._repo.lock:
            player = self._repo.find_player(player_id)
            if player is None:
                self._log.info("Score update for unknown player %r", player_id)
                raise PlayerNotFoundError(player_id)
            delta = 1 if outcome == CORRECT else -1
            player['score'] = int(player.get('score', 0)) + delta
            self._repo.save()
        self._log.info("Player %r score %+d -> %d", player_id, delta, player['score'])
        return player

    def get_leaderboard(self, year: str) -> List[Dict]:
        """Return the player records for *year*; an unknown year gives ``[]``."""
        with self._repo.lock:
            return self._repo.year(year)
