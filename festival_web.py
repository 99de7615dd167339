#!/usr/bin/env python3
"""
Festboard Web - JSON API for the festival results tracker.
Public read endpoints for the leaderboard, and access-code protected
endpoints for recording and removing placements.
"""

import datetime
import logging
from functools import wraps
from typing import Dict, Optional

from flask import Flask, jsonify, request, g

import festival
from festboard.errors import AuthenticationError, PersistenceError, ValidationError
from festboard.repositories import SnapshotRepository
from festboard.services import (
    CatalogService, LedgerService, LeaderboardService, SessionService,
)

web_logger = logging.getLogger('festboard.web')


def create_app(config: Optional[Dict] = None,
               repository: Optional[SnapshotRepository] = None) -> Flask:
    """Build the Flask app with its own repository and services.

    Args:
        config:     Settings as returned by :func:`festival.load_config`
                    (defaults to :data:`festival.DEFAULT_CONFIG`).
        repository: Snapshot repository to use instead of opening
                    ``config['data_file']``.
    """
    config = dict(festival.DEFAULT_CONFIG, **(config or {}))
    if repository is None:
        repository = SnapshotRepository(config['data_file'])

    catalog = CatalogService(repository)
    ledger = LedgerService(repository, catalog=catalog)
    leaderboard = LeaderboardService(repository)
    sessions = SessionService(
        config['access_code'], config['jwt_secret'],
        ttl=datetime.timedelta(hours=int(config['token_ttl_hours'])),
    )

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.json.sort_keys = False
    app.extensions['festboard'] = {
        'repository': repository,
        'catalog': catalog,
        'ledger': ledger,
        'leaderboard': leaderboard,
        'sessions': sessions,
    }

    def require_token(f):
        """Decorator to require a valid bearer token"""
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                g.session = sessions.verify_header(request.headers.get('Authorization'))
            except AuthenticationError as e:
                return jsonify({'error': str(e)}), 401
            return f(*args, **kwargs)
        return decorated_function

    @app.route('/api/login', methods=['POST'])
    def api_login():
        """Exchange the access code for a token"""
        data = request.get_json(silent=True) or {}
        try:
            session = sessions.login(data.get('code'))
        except AuthenticationError as e:
            return jsonify({'error': str(e)}), 401
        web_logger.info('Admin logged in from %s', request.remote_addr)
        return jsonify({'token': session['token'], 'user': {'role': session['role']}})

    @app.route('/api/me', methods=['GET'])
    @require_token
    def api_me():
        return jsonify({'role': g.session['role']})

    @app.route('/api/games', methods=['GET'])
    def api_games():
        return jsonify(catalog.list_games())

    @app.route('/api/faculties', methods=['GET'])
    def api_faculties():
        return jsonify(catalog.list_faculties())

    @app.route('/api/results', methods=['GET'])
    def api_results():
        return jsonify(leaderboard.get_leaderboard())

    @app.route('/api/results', methods=['POST'])
    @require_token
    def api_record_result():
        """Record (or replace) a placement"""
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            data = {}
        try:
            ledger.upsert_result(
                data.get('game_id'),
                data.get('position'),
                data.get('faculty'),
                participant_name=data.get('participant_name'),
                team_players=data.get('team_players'),
            )
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400
        except PersistenceError as e:
            return jsonify({'error': str(e)}), 500
        return jsonify({'success': True})

    @app.route('/api/results/<game_id>/<position>', methods=['DELETE'])
    @require_token
    def api_delete_result(game_id, position):
        """Remove a placement; succeeds whether or not it existed"""
        try:
            ledger.delete_result(game_id, position)
        except PersistenceError as e:
            return jsonify({'error': str(e)}), 500
        return jsonify({'success': True})

    return app


def serve(config: Dict) -> None:
    """Run the API with the Flask development server."""
    app = create_app(config)
    web_logger.info('Serving %s on %s:%s', config['data_file'], config['host'], config['port'])
    print("\n" + "="*60)
    print("🏆 Festboard is starting...")
    print("="*60)
    print(f"\n  http://{config['host']}:{config['port']}/api/results")
    print("\nPress Ctrl+C to stop the server")
    print("="*60 + "\n")
    try:
        app.run(host=config['host'], port=int(config['port']), debug=False, threaded=True)
    except KeyboardInterrupt:
        print("\n🛑 Festboard stopped\n")


def main():
    """Main entry point for the web server"""
    config = festival.load_config()
    festival.setup_logging(config['log_level'])
    serve(config)


if __name__ == "__main__":
    main()
