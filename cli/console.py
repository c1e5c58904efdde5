"""Console UI for romaja application."""

from core.config import DIFFICULTIES, MAX_ATTEMPTS
from core.utils import normalize
from cli.api_client import RomajaAPIClient

HELP_TEXT = f"""
How to play:
  A Korean word is shown with its English meaning.
  Type how it is written in Latin letters. Revised Romanization and
  McCune-Reischauer are both accepted; case, spaces and accents are ignored.
  You have {MAX_ATTEMPTS} attempts per word.

Commands: "stats", "reset", "difficulty <{'|'.join(DIFFICULTIES)}>", "help", "exit"
"""


class ConsoleUI:
    """Console user interface for romaja application."""

    def __init__(self, client: RomajaAPIClient):
        self.client = client

    def print_round(self, data: dict):
        """Print the word to romanize."""
        print('\n' + '=' * 40)
        print(f"  {data['word']}")
        if data['definition']:
            print(f"  ({data['definition']})")
        print('=' * 40)
        if data.get('difficulty_fallback'):
            print('No words for your difficulty, picked from the whole dictionary.')
        print(data['attempt_display'])

    def print_result(self, result: dict):
        """Print the outcome of a guess."""
        if result['result'] == 'correct':
            print('Correct!')
            if len(result['accepted_answers']) > 1:
                print(f"Also accepted: {', '.join(result['accepted_answers'][1:])}")
        elif result['result'] == 'retry':
            attempt = MAX_ATTEMPTS - result['attempts_left']
            print(f'Incorrect. Attempt {attempt}/{MAX_ATTEMPTS}')
        else:
            print(f"Out of attempts. Correct answer: {result['correct_answer']}")
        if result['resolved']:
            stats = result['statistics']
            print(f"Streak: {stats['current_streak']} (best {stats['max_streak']})")

    def print_statistics(self, stats: dict):
        """Print detailed statistics."""
        print('\n' + '=' * 40)
        print('STATISTICS')
        print('=' * 40)
        print(f"Current streak: {stats['current_streak']}")
        print(f"Max streak: {stats['max_streak']}")
        print(f"Played: {stats['total_attempts']}")
        print(f"Correct: {stats['correct_answers']} | Wrong: {stats['wrong_answers']}")
        print(f"Win rate: {stats['win_rate_display']}")
        print('=' * 40 + '\n')

    def show_help_once(self):
        """Show the help text until the player opts out."""
        settings = self.client.get_settings()
        if settings['help_dismissed']:
            return
        print(HELP_TEXT)
        answer = input("Show this again next time? [Y/n] ").strip().lower()
        if answer in ('n', 'no'):
            self.client.dismiss_help()

    def handle_command(self, user_input: str) -> bool:
        """Run a console command. Returns False if the input is not a command."""
        command, _, arg = user_input.lower().partition(' ')
        if command == 'stats':
            self.print_statistics(self.client.get_statistics())
        elif command == 'reset':
            self.print_statistics(self.client.reset_statistics())
        elif command == 'help':
            print(HELP_TEXT)
        elif command == 'difficulty' and arg.strip() in DIFFICULTIES:
            settings = self.client.set_difficulty(arg.strip())
            print(f"Difficulty set to {settings['difficulty']} (applies from the next word)")
        elif command == 'difficulty':
            print(f"Choose one of: {', '.join(DIFFICULTIES)}")
        else:
            return False
        return True

    def play_round(self) -> bool:
        """Play one round. Returns False when the player exits."""
        data = self.client.start_round()
        self.print_round(data)

        last_guess = None
        while True:
            user_input = input('==> ').strip()

            if user_input.lower() == 'exit':
                print('Goodbye!')
                return False

            if user_input == '':
                self.print_round(data)
                continue

            try:
                if self.handle_command(user_input):
                    continue
            except Exception as e:
                print(f"Error running command: {e}")
                continue

            guess = normalize(user_input)
            if not guess:
                print('Type the word in Latin letters. That did not count as an attempt.')
                continue
            # Resubmitting the same answer would only burn an attempt
            if guess == last_guess:
                print('You already tried that.')
                continue
            last_guess = guess

            try:
                result = self.client.submit_guess(user_input)
            except Exception as e:
                print(f"Error submitting guess: {e}")
                continue

            self.print_result(result)
            if result['resolved']:
                return True

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to romaja server ({health['service']}, {health['dictionary_size']} words)")
        except Exception as e:
            print(f"Error: Cannot connect to server at {self.client.base_url}: {e}")
            print("Make sure the server is running: python run_server.py")
            return

        self.show_help_once()
        stats = self.client.get_statistics()
        print(f"Streak: {stats['current_streak']} (best {stats['max_streak']}), win rate {stats['win_rate_display']}")

        while True:
            try:
                if not self.play_round():
                    return
            except Exception as e:
                print(f"Error starting round: {e}")
                return
            input('\nPress Enter for the next word...')
