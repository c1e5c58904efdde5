"""Tests for the romaja REST API."""

import unittest

from fastapi.testclient import TestClient

import server.app as server_app
from core.config import ROUND_KEY, SETTINGS_KEY
from core.models import DictionaryEntry
from test_core import MockStorage


class TestAPI(unittest.TestCase):

    def setUp(self):
        # Startup hooks only run inside a `with TestClient(...)` block, so
        # storage and dictionary are wired up by hand.
        self.storage = MockStorage()
        server_app.storage = self.storage
        server_app.dictionary = [DictionaryEntry('안녕', 'Hello')]
        self.client = TestClient(server_app.create_app())

    def tearDown(self):
        server_app.storage = None
        server_app.dictionary = None

    def start_round(self, user_id: str = 'default') -> dict:
        response = self.client.get('/api/round', params={'user_id': user_id})
        self.assertEqual(response.status_code, 200)
        return response.json()

    def guess(self, text: str, user_id: str = 'default'):
        return self.client.post('/api/guess', json={'guess': text, 'user_id': user_id})

    def test_health(self):
        data = self.client.get('/').json()
        self.assertEqual(data['service'], 'romaja')
        self.assertEqual(data['dictionary_size'], 1)

    def test_start_round(self):
        data = self.start_round()
        self.assertEqual(data['word'], '안녕')
        self.assertEqual(data['definition'], 'Hello')
        self.assertEqual(data['attempt'], 1)
        self.assertEqual(data['max_attempts'], 3)
        self.assertEqual(data['attempts_left'], 2)
        self.assertEqual(data['attempt_display'], 'Attempt 1/3')
        self.assertEqual(data['difficulty'], 'normal')
        self.assertFalse(data['difficulty_fallback'])
        self.assertIsNotNone(self.storage.get(ROUND_KEY))

    def test_round_is_resumed(self):
        self.start_round()
        self.guess('wrong')
        data = self.start_round()
        self.assertEqual(data['attempt'], 2)
        self.assertEqual(data['attempt_display'], 'Attempt 2/3')

    def test_resumed_round_keeps_its_difficulty(self):
        server_app.dictionary = [DictionaryEntry('안녕', 'Hello'), DictionaryEntry('한국어', 'Korean')]
        self.client.post('/api/settings', json={'difficulty': 'easy'})
        self.assertEqual(self.start_round()['difficulty'], 'easy')

        self.client.post('/api/settings', json={'difficulty': 'hard'})
        data = self.start_round()
        self.assertEqual(data['word'], '안녕')
        self.assertEqual(data['difficulty'], 'easy')
        self.assertFalse(data['difficulty_fallback'])

    def test_correct_guess(self):
        self.start_round()
        response = self.guess('Annyeong ')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['result'], 'correct')
        self.assertTrue(data['resolved'])
        self.assertEqual(data['accepted_answers'], ['annyeong', 'annyŏng'])
        self.assertEqual(data['statistics']['current_streak'], 1)
        self.assertEqual(data['statistics']['correct_answers'], 1)
        self.assertIsNone(self.storage.get(ROUND_KEY))

    def test_mccune_reischauer_guess(self):
        self.start_round()
        self.assertEqual(self.guess('annyong').json()['result'], 'correct')

    def test_three_wrong_guesses(self):
        self.start_round()
        first = self.guess('wrong').json()
        self.assertEqual((first['result'], first['attempts_left']), ('retry', 1))
        self.assertIsNone(first['accepted_answers'])
        second = self.guess('still wrong').json()
        self.assertEqual((second['result'], second['attempts_left']), ('retry', 0))
        third = self.guess('nope').json()
        self.assertEqual(third['result'], 'exhausted')
        self.assertEqual(third['correct_answer'], 'annyeong')
        self.assertTrue(third['resolved'])
        self.assertEqual(third['statistics']['current_streak'], 0)
        self.assertEqual(third['statistics']['wrong_answers'], 1)

    def test_empty_guess(self):
        self.start_round()
        data = self.guess('   ').json()
        self.assertEqual((data['result'], data['attempts_left']), ('retry', 2))
        self.assertEqual(self.start_round()['attempt'], 1)

    def test_guess_without_round(self):
        response = self.guess('annyeong')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['detail'], 'No active round')

    def test_guess_after_resolution(self):
        self.start_round()
        self.guess('annyeong')
        self.assertEqual(self.guess('annyeong').status_code, 400)

    def test_users_are_separate(self):
        self.start_round('alice')
        self.assertEqual(self.guess('annyeong').status_code, 400)
        self.assertEqual(self.guess('annyeong', 'alice').json()['result'], 'correct')

    def test_no_dictionary(self):
        server_app.dictionary = None
        response = self.client.get('/api/round')
        self.assertEqual(response.status_code, 503)

    def test_difficulty_fallback(self):
        self.client.post('/api/settings', json={'difficulty': 'hard'})
        data = self.start_round()
        self.assertEqual(data['word'], '안녕')
        self.assertEqual(data['difficulty'], 'normal')
        self.assertTrue(data['difficulty_fallback'])

    def test_stats_and_reset(self):
        self.start_round()
        self.guess('annyeong')
        stats = self.client.get('/api/stats').json()
        self.assertEqual(stats['total_attempts'], 1)
        self.assertEqual(stats['win_rate'], 1.0)
        self.assertEqual(stats['win_rate_display'], '100%')

        reset = self.client.post('/api/stats/reset', json={}).json()
        self.assertEqual(reset['total_attempts'], 0)
        self.assertEqual(reset['max_streak'], 0)
        self.assertEqual(reset['win_rate'], 0.0)

    def test_settings(self):
        data = self.client.get('/api/settings').json()
        self.assertEqual(data, {'difficulty': 'normal', 'theme': 'auto', 'help_dismissed': False})

        data = self.client.post('/api/settings', json={'theme': 'dark'}).json()
        self.assertEqual(data['theme'], 'dark')
        self.assertEqual(data['difficulty'], 'normal')
        self.assertEqual(self.storage.get(SETTINGS_KEY)['theme'], 'dark')

    def test_invalid_settings(self):
        response = self.client.post('/api/settings', json={'difficulty': 'extreme'})
        self.assertEqual(response.status_code, 422)

    def test_dismiss_help(self):
        data = self.client.post('/api/help/dismiss', json={'user_id': 'bob'}).json()
        self.assertTrue(data['help_dismissed'])
        self.assertFalse(self.client.get('/api/settings').json()['help_dismissed'])


if __name__ == '__main__':
    unittest.main()
