"""Public leaderboard: results joined with their games."""
from typing import Dict, List

from ..catalog import collation_key
from ..repositories.snapshot_repository import SnapshotRepository


class LeaderboardService:
    """Builds the leaderboard view from the snapshot on every call.

    Each entry is a result dict extended with ``game_name``, ``game_icon`` and
    ``game_type``; those are ``None`` when the result's game is not in the
    catalog.  Entries are ordered by game name, then by position.
    """

    def __init__(self, repository: SnapshotRepository) -> None:
        self._repo = repository

    def get_leaderboard(self) -> List[Dict]:
        games = {g.get('id'): g for g in self._repo.data['games']}
        board = []
        for result in self._repo.data['results']:
            game = games.get(result.get('game_id')) or {}
            entry = dict(result)
            entry['game_name'] = game.get('name')
            entry['game_icon'] = game.get('icon')
            entry['game_type'] = game.get('type')
            board.append(entry)
        board.sort(key=lambda e: (collation_key(e['game_name']), e.get('position') or 0))
        return board

    def podium(self, game_id: str) -> List[Dict]:
        """Return the leaderboard entries of one game, best position first."""
        return [e for e in self.get_leaderboard() if e.get('game_id') == game_id]
