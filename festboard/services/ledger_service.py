"""Business logic for recording festival placements."""
import datetime
import logging
import threading
import time
from typing import Dict, List, Optional, Union

from ..errors import ValidationError
from ..repositories.snapshot_repository import SnapshotRepository

logger = logging.getLogger('festboard.ledger')


def parse_position(value) -> Optional[int]:
    """Return *value* as a positive int, or ``None`` if it is not one.

    Accepts ints, whole-valued floats such as ``1.0`` and strings of
    decimal digits; booleans are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit() and text.isascii():
            number = int(text)
            return number if number > 0 else None
    return None


def _utc_timestamp() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f'{now.microsecond // 1000:03d}Z'


class LedgerService:
    """Records, replaces and removes placements, delegating persistence to
    :class:`~festboard.repositories.snapshot_repository.SnapshotRepository`.

    Rules
    -----
    * At most one result exists per ``(game_id, position)``; recording a
      placement that is already taken replaces the previous entry.
    * ``game_id`` and ``faculty`` are required non-empty strings and
      ``position`` must be a positive integer.
    * Every change is written to the snapshot before the call returns.  If
      the write fails the in-memory ledger is left as it was.

    Mutations are serialized with a lock, so concurrent request threads can
    never interleave "change the ledger" and "write the snapshot".
    """

    def __init__(self, repository: SnapshotRepository, catalog=None) -> None:
        self._repo = repository
        self._catalog = catalog
        self._lock = threading.Lock()
        self._last_id = max((r.get('id', 0) for r in self._repo.data['results']
                             if isinstance(r.get('id'), int)), default=0)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def upsert_result(self, game_id: str, position, faculty: str,
                      participant_name: Optional[str] = None,
                      team_players: Union[List[str], str, None] = None) -> Dict:
        """Record *faculty*'s placement at *position* in *game_id*.

        Returns:
            The stored result dict.

        Raises:
            ValidationError: if a required field is missing or *position* is
                not a positive integer.
            PersistenceError: if the snapshot could not be written.
        """
        if not game_id or not faculty or position in (None, ''):
            raise ValidationError('Missing fields')
        if not isinstance(game_id, str) or not isinstance(faculty, str):
            raise ValidationError('game_id and faculty must be strings')
        rank = parse_position(position)
        if rank is None:
            raise ValidationError('Invalid position')
        if self._catalog is not None and self._catalog.find_game(game_id) is None:
            logger.warning("Recording result for unknown game %r", game_id)

        with self._lock:
            result = {
                'id': self._next_id(),
                'game_id': game_id,
                'position': rank,
                'participant_name': participant_name,
                'faculty': faculty,
                'team_players': team_players,
                'created_at': _utc_timestamp(),
            }
            results = [r for r in self._repo.data['results']
                       if not self._matches(r, game_id, rank)]
            results.append(result)
            self._commit(results)
        logger.info("Recorded %s #%d for %s", game_id, rank, faculty)
        return dict(result)

    def delete_result(self, game_id: str, position) -> bool:
        """Remove the placement at *position* in *game_id*.

        Returns:
            ``True`` if a result was removed; ``False`` if none matched.
            The snapshot is rewritten either way.
        """
        rank = parse_position(position)
        with self._lock:
            current = self._repo.data['results']
            results = [r for r in current
                       if rank is None or not self._matches(r, game_id, rank)]
            removed = len(results) != len(current)
            self._commit(results)
        if removed:
            logger.info("Deleted %s #%s", game_id, rank)
        return removed

    def list_results(self) -> List[Dict]:
        """Return a copy of every recorded result, in no particular order."""
        return [dict(r) for r in self._repo.data['results']]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _matches(result: Dict, game_id: str, rank: int) -> bool:
        return result.get('game_id') == game_id and result.get('position') == rank

    def _next_id(self) -> int:
        candidate = int(time.time() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _commit(self, results: List[Dict]) -> None:
        # Write first; only a durable snapshot replaces the in-memory ledger.
        state = dict(self._repo.data)
        state['results'] = results
        self._repo.save(state)
        self._repo.data['results'] = results
