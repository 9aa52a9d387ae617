"""Repository for yearly player scores ({year: [player, ...]})."""
from typing import Any, Dict, List, Optional, Tuple

from ..errors import StoreLoadError
from .base import BaseRepository


def id_key(player_id: Any) -> Tuple[str, Any]:
    """Return the index key for *player_id*.

    Ids match only when both kind and value are equal: ``True`` never matches
    ``1`` and ``"1"`` never matches ``1``.  Integers and floats are one kind
    (JSON has a single number type), so ``1`` matches ``1.0``.
    """
    if isinstance(player_id, bool):
        return ('bool', player_id)
    if isinstance(player_id, (int, float)):
        return ('number', player_id)
    return (type(player_id).__name__, player_id)


class LeaderboardRepository(BaseRepository):
    """Holds the leaderboard document in memory and persists it to JSON.

    Schema::

        {
            "<year>": [
                {"id": <str>, "name": <str>, "score": <int>}
            ]
        }

    A player id may appear under several years.  An index of
    ``player id -> (year, position)`` is built on load and points at the
    first record for that id, scanning years in document order and records
    in list order.  A document whose years or records have the wrong shape
    is rejected at load time.
    """

    def __init__(self, file_path: str = 'leaderboard.json') -> None:
        super().__init__(file_path)
        self.data: Dict[str, List[Dict]] = self._load()
        self._index: Dict[Tuple[str, Any], Tuple[str, int]] = {}
        try:
            self.rebuild_index()
        except ValueError as exc:
            raise StoreLoadError(self._path, str(exc)) from exc

    def rebuild_index(self) -> None:
        """Recompute the player-id index from ``self.data``.

        Raises:
            ValueError: If a year is not a list, a record is not an object,
                or a record id is a list or object.
        """
        index: Dict[Tuple[str, Any], Tuple[str, int]] = {}
        for year, players in self.data.items():
            if players is None:
                continue
            if not isinstance(players, list):
                raise ValueError(f'year {year!r} must hold a list of players')
            for position, player in enumerate(players):
                if not isinstance(player, dict):
                    raise ValueError(f'year {year!r} entry {position} is not an object')
                player_id = player.get('id')
                if player_id is None:
                    continue
                if isinstance(player_id, (list, dict)):
                    raise ValueError(f'year {year!r} entry {position} has a non-scalar id')
                index.setdefault(id_key(player_id), (year, position))
        self._index = index

    def find_player(self, player_id: Any) -> Optional[Dict]:
        """Return the first record whose id is *player_id*, or ``None``.

        Unhashable ids (lists, objects) never match.
        """
        try:
            location = self._index.get(id_key(player_id))
        except TypeError:
            return None
        if location is None:
            return None
        year, position = location
        return self.data[year][position]

    def year(self, year: str) -> List[Dict]:
        """Return the records for *year*, or an empty list."""
        return self.data.get(year) or []

    def save(self) -> None:
        """Persist the current in-memory data to disk."""
        self._save(self.data)
