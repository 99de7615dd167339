"""Services package — expose all concrete services from one import."""
from .catalog_service import CatalogService
from .ledger_service import LedgerService
from .leaderboard_service import LeaderboardService
from .session_service import SessionService

__all__ = [
    'CatalogService',
    'LedgerService',
    'LeaderboardService',
    'SessionService',
]
