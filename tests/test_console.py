"""Tests for the console client's round loop."""

import io
import unittest
from unittest.mock import MagicMock, patch

from cli.console import ConsoleUI

ROUND = {
    'word': '안녕',
    'definition': 'Hello',
    'attempt_display': 'Attempt 1/3',
    'difficulty': 'normal',
    'difficulty_fallback': False,
}

RETRY = {'result': 'retry', 'attempts_left': 1, 'correct_answer': None,
         'accepted_answers': None, 'resolved': False}

CORRECT = {'result': 'correct', 'attempts_left': 0, 'correct_answer': None,
           'accepted_answers': ['annyeong', 'annyŏng'], 'resolved': True,
           'statistics': {'current_streak': 1, 'max_streak': 1}}


class TestPlayRound(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.client.start_round.return_value = ROUND
        self.ui = ConsoleUI(self.client)

    def play(self, *inputs):
        with patch('builtins.input', side_effect=list(inputs)), \
                patch('sys.stdout', new_callable=io.StringIO) as out:
            result = self.ui.play_round()
        return result, out.getvalue()

    def test_punctuation_only_guess_is_not_sent(self):
        result, output = self.play('?!', 'exit')
        self.assertFalse(result)
        self.client.submit_guess.assert_not_called()
        self.assertIn('did not count as an attempt', output)
        self.assertNotIn('Incorrect', output)

    def test_repeated_guess_is_not_sent(self):
        self.client.submit_guess.return_value = RETRY
        result, output = self.play('wrong', 'Wrong!', 'exit')
        self.client.submit_guess.assert_called_once_with('wrong')
        self.assertIn('Incorrect. Attempt 2/3', output)
        self.assertIn('You already tried that.', output)

    def test_correct_guess_ends_round(self):
        self.client.submit_guess.return_value = CORRECT
        result, output = self.play('annyeong')
        self.assertTrue(result)
        self.assertIn('Correct!', output)
        self.assertIn('Also accepted: annyŏng', output)


if __name__ == '__main__':
    unittest.main()
