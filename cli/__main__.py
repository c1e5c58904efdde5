"""Entry point for romaja CLI client."""

import argparse
import logging
import sys

from cli.api_client import RomajaAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Romaja - Korean romanization quiz')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log HTTP requests'
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

    client = RomajaAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
