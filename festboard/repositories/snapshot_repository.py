"""Repository for the festival snapshot ({games, faculties, results})."""
from typing import Dict

from ..catalog import DEFAULT_FACULTIES, GAME_TYPES, default_state
from ..errors import PersistenceError
from .base import BaseRepository


class SnapshotRepository(BaseRepository):
    """Persists the whole festival state to one JSON file.

    Schema::

        {
            "games":     [{"id", "name", "icon", "type"}, ...],
            "faculties": ["<faculty>", ...],
            "results":   [{"id", "game_id", "position", "participant_name",
                           "faculty", "team_players", "created_at"}, ...]
        }

    Every :meth:`save` rewrites the file wholesale.  A missing or corrupt
    file is healed on :meth:`load` by writing the built-in defaults.
    """

    def __init__(self, file_path: str = './data.json') -> None:
        super().__init__(file_path)
        self.data: Dict = self.load()

    def load(self) -> Dict:
        """Read the snapshot from disk, falling back to (and persisting) the
        default catalog with an empty ledger when it is absent or unusable."""
        state = self._load(None)
        if isinstance(state, dict):
            if 'faculties' not in state:
                state['faculties'] = list(DEFAULT_FACULTIES)
            if 'results' not in state:
                state['results'] = []
        if not self._is_valid(state):
            if state is not None:
                self._log.warning("Snapshot %s is malformed; resetting to defaults",
                                  self._path)
            state = default_state()
            self._log.info("Writing default snapshot to %s", self._path)
            try:
                self.save(state)
            except PersistenceError:
                # Serve the defaults from memory; the next write retries the file.
                self._log.warning("Continuing with an unsaved default snapshot")
        return state

    @staticmethod
    def _is_valid(state) -> bool:
        if not isinstance(state, dict):
            return False
        games, faculties, results = state.get('games'), state['faculties'], state['results']
        if not all(isinstance(v, list) for v in (games, faculties, results)):
            return False
        for game in games:
            if not isinstance(game, dict) or game.get('type') not in GAME_TYPES:
                return False
            if not isinstance(game.get('id'), str) or not isinstance(game.get('name'), str):
                return False
        if not all(isinstance(f, str) for f in faculties):
            return False
        for result in results:
            if not isinstance(result, dict):
                return False
            position = result.get('position')
            if not isinstance(position, int) or isinstance(position, bool):
                return False
        return True

    def save(self, state: Dict = None) -> None:
        """Write *state* (default: the in-memory data) as the new snapshot.

        Raises:
            PersistenceError: if the file could not be written.
        """
        if state is None:
            state = self.data
        try:
            self._save(state)
        except (OSError, TypeError, ValueError) as exc:
            self._log.exception("Could not save snapshot %s", self._path)
            raise PersistenceError(f'Could not save results: {exc}') from exc
