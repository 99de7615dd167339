"""Read-only access to the festival catalog (games and faculties)."""
from typing import Dict, List, Optional

from ..catalog import collation_key
from ..repositories.snapshot_repository import SnapshotRepository


class CatalogService:
    """Serves the game and faculty lists held in
    :class:`~festboard.repositories.snapshot_repository.SnapshotRepository`.

    The catalog is fixed once the snapshot is loaded; this service exposes no
    mutation.  Returned lists are copies, so callers cannot alter the store.
    """

    def __init__(self, repository: SnapshotRepository) -> None:
        self._repo = repository

    def list_games(self) -> List[Dict]:
        """Return all games sorted by display name."""
        games = [dict(g) for g in self._repo.data['games']]
        return sorted(games, key=lambda g: collation_key(g.get('name')))

    def list_faculties(self) -> List[str]:
        """Return all faculty names in ascending order."""
        return sorted(self._repo.data['faculties'])

    def find_game(self, game_id: str) -> Optional[Dict]:
        """Return the game with *game_id*, or ``None``."""
        for game in self._repo.data['games']:
            if game.get('id') == game_id:
                return game
        return None
