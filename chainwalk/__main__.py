"""Command-line entry point.

Usage:
    python -m chainwalk snakes SEED COUNT
    python -m chainwalk tweets SEED COUNT CORPUS [WORD_LIMIT]

Options:
    --config PATH   YAML settings file (default: chainwalk.yaml)
    --verbose       Log at DEBUG level regardless of the settings file
"""

import argparse
import logging
import random
import sys
import typing

import chainwalk.adapters.snakes_and_ladders
import chainwalk.adapters.tweets
import chainwalk.config
import chainwalk.exceptions


logger = logging.getLogger(__name__)


def _build_parser () -> argparse.ArgumentParser:

	parser = argparse.ArgumentParser(prog="chainwalk", description="Generate random walks from Markov chains.")
	parser.add_argument("--config", default=chainwalk.config.DEFAULT_CONFIG_PATH, help="YAML settings file")
	parser.add_argument("--verbose", action="store_true", help="enable debug logging")

	commands = parser.add_subparsers(dest="command", required=True)

	snakes = commands.add_parser("snakes", help="random routes across a snakes and ladders board")
	snakes.add_argument("seed", type=int, help="random seed")
	snakes.add_argument("count", type=int, help="number of routes to print")

	tweets = commands.add_parser("tweets", help="random tweets learned from a text corpus")
	tweets.add_argument("seed", type=int, help="random seed")
	tweets.add_argument("count", type=int, help="number of tweets to print")
	tweets.add_argument("corpus", help="path to the text corpus")
	tweets.add_argument("word_limit", type=int, nargs="?", default=None, help="stop reading the corpus after this many words")

	return parser


def _run_snakes (args: argparse.Namespace, settings: chainwalk.config.Settings, rng: random.Random) -> None:

	chain = chainwalk.adapters.snakes_and_ladders.create_chain(rng=rng)

	with chain:
		chainwalk.adapters.snakes_and_ladders.generate_routes(chain, args.count, max_length=settings.snakes_max_length)


def _run_tweets (args: argparse.Namespace, settings: chainwalk.config.Settings, rng: random.Random) -> None:

	with open(args.corpus, 'r') as corpus:
		chain = chainwalk.adapters.tweets.create_chain(corpus, word_limit=args.word_limit, rng=rng)

	with chain:
		chainwalk.adapters.tweets.generate_tweets(chain, args.count, max_length=settings.tweets_max_length)


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Parse arguments, build the requested chain and print its walks.

	Returns the process exit status.
	"""

	args = _build_parser().parse_args(argv)

	try:
		settings = chainwalk.config.load_config(args.config)
	except (OSError, ValueError) as e:
		print(f"Invalid configuration: {e}", file=sys.stderr)
		return 1

	logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level)

	if args.count < 0:
		logger.error("Count cannot be negative")
		return 1

	# One generator for the whole run; every walk draws from it in turn.
	rng = random.Random(args.seed)

	try:
		if args.command == "snakes":
			_run_snakes(args, settings, rng)
		else:
			_run_tweets(args, settings, rng)

	except OSError as e:
		logger.error(f"Cannot read corpus: {e}")
		return 1

	except ValueError as e:
		logger.error(str(e))
		return 1

	except chainwalk.exceptions.ChainError as e:
		logger.error(f"Chain failure: {e}")
		return 1

	return 0


if __name__ == "__main__":
	sys.exit(main())
