"""Unit tests for the storage backends."""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from server.file_storage import FileStorage
from server.postgres_storage import PostgresStorage


class TestFileStorage(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.state_dir = self._tmp.name
        self.storage = FileStorage(state_dir=self.state_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def test_get_missing(self):
        self.assertIsNone(self.storage.get('round'))

    def test_set_and_get(self):
        self.storage.set('round', {'word': '안녕', 'definition': 'Hello', 'attempt': 2})
        self.assertEqual(self.storage.get('round'), {'word': '안녕', 'definition': 'Hello', 'attempt': 2})

    def test_keys_share_one_document(self):
        self.storage.set('round', {'word': '물'})
        self.storage.set('statistics', {'current_streak': 1})
        with open(os.path.join(self.state_dir, 'romaja_state.json'), encoding='utf-8') as f:
            state = json.load(f)
        self.assertEqual(set(state), {'round', 'statistics'})
        self.assertEqual(state['round'], {'word': '물'})

    def test_remove(self):
        self.storage.set('round', {'word': '물'})
        self.storage.set('settings', {'theme': 'dark'})
        self.storage.remove('round')
        self.assertIsNone(self.storage.get('round'))
        self.assertEqual(self.storage.get('settings'), {'theme': 'dark'})

    def test_remove_missing_is_noop(self):
        self.storage.remove('round')
        self.assertFalse(os.path.exists(os.path.join(self.state_dir, 'romaja_state.json')))

    def test_users_have_separate_files(self):
        self.storage.set('round', {'word': '물'}, user_id='alice')
        self.assertIsNone(self.storage.get('round'))
        self.assertEqual(self.storage.get('round', user_id='alice'), {'word': '물'})
        self.assertTrue(os.path.exists(os.path.join(self.state_dir, 'romaja_state_alice.json')))

    def test_creates_state_dir(self):
        storage = FileStorage(state_dir=os.path.join(self.state_dir, 'nested'))
        storage.set('settings', {'theme': 'light'})
        self.assertEqual(storage.get('settings'), {'theme': 'light'})

    def test_unreadable_file_reads_as_empty(self):
        with open(os.path.join(self.state_dir, 'romaja_state.json'), 'w') as f:
            f.write('{not json')
        with self.assertLogs('server.file_storage', level='WARNING'):
            self.assertIsNone(self.storage.get('round'))

    def test_unreadable_file_is_replaced_on_write(self):
        with open(os.path.join(self.state_dir, 'romaja_state.json'), 'w') as f:
            f.write('[1, 2]')
        with self.assertLogs('server.file_storage', level='WARNING'):
            self.storage.set('settings', {'theme': 'dark'})
        self.assertEqual(self.storage.get('settings'), {'theme': 'dark'})


class TestPostgresStorage(unittest.TestCase):

    def setUp(self):
        patcher = patch('server.postgres_storage.psycopg2.connect')
        self.connect = patcher.start()
        self.addCleanup(patcher.stop)
        self.conn = self.connect.return_value
        self.conn.closed = False
        self.cur = self.conn.cursor.return_value.__enter__.return_value
        self.storage = PostgresStorage(db_url='postgresql://test/romaja')

    def test_lazy_connection(self):
        self.connect.assert_not_called()
        self.storage.get('round')
        self.connect.assert_called_once_with('postgresql://test/romaja')

    def test_creates_table(self):
        self.storage.get('round')
        statements = [c[0][0] for c in self.cur.execute.call_args_list]
        self.assertTrue(any('CREATE TABLE IF NOT EXISTS kv_state' in s for s in statements))

    def test_get(self):
        self.cur.fetchone.return_value = {'value': {'word': '물', 'attempt': 1}}
        self.assertEqual(self.storage.get('round', 'alice'), {'word': '물', 'attempt': 1})
        sql, params = self.cur.execute.call_args[0]
        self.assertIn('SELECT value FROM kv_state', sql)
        self.assertEqual(params, ('alice', 'round'))

    def test_get_missing(self):
        self.cur.fetchone.return_value = None
        self.assertIsNone(self.storage.get('round'))

    def test_set_upserts(self):
        self.storage.set('statistics', {'current_streak': 1})
        sql, params = self.cur.execute.call_args[0]
        self.assertIn('INSERT INTO kv_state', sql)
        self.assertIn('ON CONFLICT', sql)
        self.assertEqual(params, ('default', 'statistics', json.dumps({'current_streak': 1})))
        self.conn.commit.assert_called()

    def test_set_rolls_back_on_error(self):
        self.storage.get('round')
        self.cur.execute.side_effect = RuntimeError('db down')
        with self.assertLogs('server.postgres_storage', level='ERROR'):
            with self.assertRaises(RuntimeError):
                self.storage.set('round', {'word': '물'})
        self.conn.rollback.assert_called_once()

    def test_remove(self):
        self.storage.remove('round', 'alice')
        sql, params = self.cur.execute.call_args[0]
        self.assertIn('DELETE FROM kv_state', sql)
        self.assertEqual(params, ('alice', 'round'))
        self.conn.commit.assert_called()


if __name__ == '__main__':
    unittest.main()
