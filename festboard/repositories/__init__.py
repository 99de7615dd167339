"""Repository package — expose the concrete repositories from one import."""
from .base import BaseRepository
from .snapshot_repository import SnapshotRepository

__all__ = [
    'BaseRepository',
    'SnapshotRepository',
]
