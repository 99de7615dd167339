#!/usr/bin/env python3
"""
Flask route tests for the festboard JSON API.

Run with:
    python -m pytest tests/test_web.py
"""
import json
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import festival_web


class WebTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.data_file = os.path.join(self.tmp, 'data.json')
        self.app = festival_web.create_app({
            'data_file': self.data_file,
            'access_code': '1911',
            'jwt_secret': 'test-secret',
        })
        self.app.config['TESTING'] = True
        self.client = self.app.test_client()

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def _token(self):
        resp = self.client.post('/api/login', json={'code': '1911'})
        return json.loads(resp.data)['token']

    def _auth(self):
        return {'Authorization': f'Bearer {self._token()}'}

    def _results(self):
        return json.loads(self.client.get('/api/results').data)

    def _saved_results(self):
        with open(self.data_file, encoding='utf-8') as f:
            return json.load(f)['results']


class TestLoginRoutes(WebTestCase):

    def test_login_success(self):
        resp = self.client.post('/api/login', json={'code': '1911'})
        self.assertEqual(resp.status_code, 200)
        data = json.loads(resp.data)
        self.assertIn('token', data)
        self.assertEqual(data['user'], {'role': 'admin'})

    def test_login_wrong_code(self):
        resp = self.client.post('/api/login', json={'code': '0000'})
        self.assertEqual(resp.status_code, 401)
        self.assertIn('error', json.loads(resp.data))

    def test_login_without_body(self):
        resp = self.client.post('/api/login')
        self.assertEqual(resp.status_code, 401)

    def test_me_with_token(self):
        resp = self.client.get('/api/me', headers=self._auth())
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(json.loads(resp.data), {'role': 'admin'})

    def test_me_without_token(self):
        resp = self.client.get('/api/me')
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(json.loads(resp.data), {'error': 'No token'})

    def test_me_with_bad_token(self):
        resp = self.client.get('/api/me', headers={'Authorization': 'Bearer nope'})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(json.loads(resp.data), {'error': 'Invalid token'})


class TestCatalogRoutes(WebTestCase):

    def test_games_sorted(self):
        games = json.loads(self.client.get('/api/games').data)
        names = [g['name'] for g in games]
        self.assertEqual(names, sorted(names, key=str.casefold))
        self.assertEqual(set(games[0]), {'id', 'name', 'icon', 'type'})

    def test_faculties_sorted(self):
        faculties = json.loads(self.client.get('/api/faculties').data)
        self.assertEqual(faculties, sorted(faculties))
        self.assertIn('Science', faculties)

    def test_icons_not_escaped(self):
        resp = self.client.get('/api/games')
        self.assertIn('♟️', resp.get_data(as_text=True))


class TestResultRoutes(WebTestCase):

    def test_record_requires_token(self):
        resp = self.client.post('/api/results', json={
            'game_id': 'chess', 'position': 1, 'faculty': 'Science'})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(self._results(), [])

    def test_record_and_overwrite(self):
        headers = self._auth()
        resp = self.client.post('/api/results', headers=headers, json={
            'game_id': 'chess', 'position': 1, 'faculty': 'Science',
            'participant_name': 'Ali'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(json.loads(resp.data), {'success': True})
        board = self._results()
        self.assertEqual(len(board), 1)
        self.assertEqual(board[0]['game_icon'], '♟️')
        self.assertEqual(board[0]['faculty'], 'Science')

        self.client.post('/api/results', headers=headers, json={
            'game_id': 'chess', 'position': '1', 'faculty': 'Law',
            'participant_name': 'Sara'})
        board = self._results()
        self.assertEqual(len(board), 1)
        self.assertEqual(board[0]['participant_name'], 'Sara')
        self.assertEqual(board[0]['faculty'], 'Law')
        self.assertEqual(board[0]['position'], 1)

    def test_record_team_game(self):
        self.client.post('/api/results', headers=self._auth(), json={
            'game_id': 'football', 'position': 1, 'faculty': 'Law',
            'team_players': ['Omar', 'Yusuf']})
        entry = self._results()[0]
        self.assertEqual(entry['team_players'], ['Omar', 'Yusuf'])
        self.assertEqual(entry['game_type'], 'team')

    def test_missing_faculty_is_400(self):
        resp = self.client.post('/api/results', headers=self._auth(), json={
            'game_id': 'chess', 'position': 1, 'participant_name': 'Ali'})
        self.assertEqual(resp.status_code, 400)
        self.assertIn('error', json.loads(resp.data))
        self.assertEqual(self._results(), [])
        self.assertEqual(self._saved_results(), [])

    def test_invalid_position_is_400(self):
        resp = self.client.post('/api/results', headers=self._auth(), json={
            'game_id': 'chess', 'position': 'first', 'faculty': 'Law'})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(json.loads(resp.data), {'error': 'Invalid position'})

    def test_non_object_body_is_400(self):
        resp = self.client.post('/api/results', headers=self._auth(), json=['chess'])
        self.assertEqual(resp.status_code, 400)

    def test_delete_twice(self):
        headers = self._auth()
        self.client.post('/api/results', headers=headers, json={
            'game_id': 'chess', 'position': 1, 'faculty': 'Science'})
        for _ in range(2):
            resp = self.client.delete('/api/results/chess/1', headers=headers)
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(json.loads(resp.data), {'success': True})
            self.assertEqual(self._results(), [])

    def test_delete_requires_token(self):
        resp = self.client.delete('/api/results/chess/1')
        self.assertEqual(resp.status_code, 401)

    def test_results_sorted(self):
        headers = self._auth()
        for game_id, position in (('running', 2), ('chess', 3), ('running', 1), ('chess', 1)):
            self.client.post('/api/results', headers=headers, json={
                'game_id': game_id, 'position': position, 'faculty': 'Arts'})
        board = [(e['game_id'], e['position']) for e in self._results()]
        self.assertEqual(board, [('chess', 1), ('chess', 3), ('running', 1), ('running', 2)])

    def test_save_failure_is_500(self):
        repo = self.app.extensions['festboard']['repository']
        with patch.object(repo, '_save', side_effect=OSError('read-only')):
            resp = self.client.post('/api/results', headers=self._auth(), json={
                'game_id': 'chess', 'position': 1, 'faculty': 'Law'})
        self.assertEqual(resp.status_code, 500)
        self.assertIn('error', json.loads(resp.data))
        self.assertEqual(self._results(), [])

    def test_results_survive_restart(self):
        self.client.post('/api/results', headers=self._auth(), json={
            'game_id': 'chess', 'position': 2, 'faculty': 'Law'})
        restarted = festival_web.create_app({'data_file': self.data_file}).test_client()
        board = json.loads(restarted.get('/api/results').data)
        self.assertEqual(board[0]['position'], 2)


if __name__ == '__main__':
    unittest.main()
