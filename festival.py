#!/usr/bin/env python3
"""
Festboard - festival competition results tracker.
Records 1st/2nd/3rd placements per game and faculty, and serves the public
leaderboard over a small JSON API.
"""

import argparse
import json
import logging
import os
import sys
from typing import Dict, Optional

from colorama import init, Fore, Style
from dotenv import find_dotenv, load_dotenv

from festboard.repositories import SnapshotRepository
from festboard.services import CatalogService, LeaderboardService

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure the root festboard logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to WARNING so normal use is quiet.

    Returns:
        Configured logger instance.
    """
    numeric = getattr(logging, str(level).upper(), logging.WARNING)
    logger = logging.getLogger('festboard')
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(numeric)
    return logger


logger = logging.getLogger('festboard')

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: Dict = {
    'host': '127.0.0.1',
    'port': 3000,
    'jwt_secret': 'festival-secret-2025',
    'access_code': '1911',
    'data_file': './data.json',
    'token_ttl_hours': 24,
    'log_level': 'INFO',
}

# environment variable -> config key
ENV_OVERRIDES = {
    'HOST': 'host',
    'PORT': 'port',
    'JWT_SECRET': 'jwt_secret',
    'ACCESS_CODE': 'access_code',
    'DATA_FILE': 'data_file',
    'FESTIVAL_LOG_LEVEL': 'log_level',
}

INT_KEYS = ('port', 'token_ttl_hours')


def load_config(config_path: str = 'config.json') -> Dict:
    """Load configuration from defaults, a JSON file and the environment.

    Environment variables take precedence over config file values, which take
    precedence over :data:`DEFAULT_CONFIG`.  A ``.env`` file in the working
    directory is read first.  A missing config file is fine.

    Raises:
        ValueError: if ``port`` or ``token_ttl_hours`` is not an integer.
    """
    load_dotenv(find_dotenv(usecwd=True))
    config = dict(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            if isinstance(file_config, dict):
                config.update(file_config)
            else:
                logger.warning("Ignoring %s: expected a JSON object", config_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read config %s: %s", config_path, e)

    for env_name, key in ENV_OVERRIDES.items():
        if os.getenv(env_name):
            config[key] = os.getenv(env_name)

    for key in INT_KEYS:
        try:
            config[key] = int(config[key])
        except (TypeError, ValueError):
            raise ValueError(f"Invalid value for {key}: {config[key]!r}")
    return config

# ---------------------------------------------------------------------------
# Terminal output
# ---------------------------------------------------------------------------

MEDAL_COLORS = {1: Fore.YELLOW, 2: Fore.WHITE, 3: Fore.RED}


def format_entry(entry: Dict) -> str:
    """One leaderboard line: position, faculty and who placed."""
    color = MEDAL_COLORS.get(entry.get('position'), Fore.CYAN)
    who = entry.get('participant_name') or ''
    players = entry.get('team_players')
    if isinstance(players, list):
        players = ', '.join(str(p) for p in players)
    if players:
        who = f"{who} ({players})" if who else players
    line = f"{color}{Style.BRIGHT}#{entry.get('position')}{Style.RESET_ALL} {entry.get('faculty')}"
    return f"{line} - {who}" if who else line


def print_leaderboard(leaderboard: LeaderboardService, game_id: Optional[str] = None) -> None:
    if game_id:
        entries = leaderboard.podium(game_id)
    else:
        entries = leaderboard.get_leaderboard()
    if not entries:
        print(f"{Fore.YELLOW}No results recorded yet.")
        return
    current = object()
    for entry in entries:
        if entry.get('game_id') != current:
            current = entry.get('game_id')
            title = entry.get('game_name') or entry.get('game_id')
            icon = entry.get('game_icon') or ''
            print(f"\n{Fore.GREEN}{Style.BRIGHT}{icon} {title}".rstrip())
        print(f"  {format_entry(entry)}")


def print_games(catalog: CatalogService) -> None:
    for game in catalog.list_games():
        print(f"{game.get('icon', '')} {Style.BRIGHT}{game['name']}{Style.RESET_ALL}"
              f" {Fore.CYAN}[{game['id']}, {game['type']}]")


def print_faculties(catalog: CatalogService) -> None:
    for faculty in catalog.list_faculties():
        print(faculty)


def main(argv: Optional[list] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Festboard - festival competition results tracker',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 festival.py serve                  # Run the API on the configured port
  python3 festival.py serve --port 8080      # Run the API on port 8080
  python3 festival.py leaderboard            # Print the current standings
  python3 festival.py leaderboard --game chess   # Print one game's podium
  python3 festival.py games                  # List the games on the programme
        """
    )
    parser.add_argument(
        '--config', '-c',
        default='config.json',
        help='Path to config file (default: config.json)'
    )
    parser.add_argument(
        '--data-file',
        help='Path to the snapshot file (overrides config)'
    )
    parser.add_argument(
        '--log-level',
        help='Log level (DEBUG, INFO, WARNING, ERROR)'
    )
    sub = parser.add_subparsers(dest='command')
    serve = sub.add_parser('serve', help='Run the HTTP API')
    serve.add_argument('--host', help='Interface to bind')
    serve.add_argument('--port', type=int, help='Port to listen on')
    board = sub.add_parser('leaderboard', help='Print the leaderboard')
    board.add_argument('--game', help='Only show results for this game id')
    sub.add_parser('games', help='List games')
    sub.add_parser('faculties', help='List faculties')

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"{Fore.RED}Error: {e}")
        return 2
    if args.data_file:
        config['data_file'] = args.data_file
    if args.log_level:
        config['log_level'] = args.log_level
    setup_logging(config['log_level'])

    if args.command == 'serve':
        import festival_web
        if args.host:
            config['host'] = args.host
        if args.port:
            config['port'] = args.port
        festival_web.serve(config)
        return 0

    repository = SnapshotRepository(config['data_file'])
    if args.command == 'leaderboard':
        print_leaderboard(LeaderboardService(repository), args.game)
    elif args.command == 'games':
        print_games(CatalogService(repository))
    elif args.command == 'faculties':
        print_faculties(CatalogService(repository))
    return 0


if __name__ == "__main__":
    sys.exit(main())
