"""
Tweet generation from a text corpus.

Each distinct word is a state and each pair of neighbouring words on a line is
an observed transition. A word ending in a full stop closes a tweet. This is a
plain suffix check, so abbreviations such as ``Dr.`` also close a tweet.
"""

import logging
import random
import re
import sys
import typing

import chainwalk.capabilities
import chainwalk.exceptions
import chainwalk.markov_chain


logger = logging.getLogger(__name__)

MAX_TWEET_LENGTH = 20

_DELIMITERS = re.compile(r"[ \n\r]+")


def tokenize (line: str) -> typing.List[str]:

	"""
	Split a line on spaces and line breaks, dropping empty tokens.
	"""

	return [word for word in _DELIMITERS.split(line) if word]


class WordCapabilities (chainwalk.capabilities.Capabilities[str]):

	"""Words compare as strings; one ending in ``.`` is the last of a tweet."""

	def copy (self, payload: str) -> str:

		return str(payload)


	def compare (self, a: str, b: str) -> int:

		return chainwalk.capabilities.three_way_compare(a, b)


	def is_terminal (self, payload: str) -> bool:

		return payload.endswith(".")


	def describe (self, payload: str) -> str:

		if self.is_terminal(payload):
			return payload

		return payload + " "


def fill_chain (
	chain: chainwalk.markov_chain.MarkovChain[str],
	lines: typing.Iterable[str],
	word_limit: typing.Optional[int] = None
) -> int:

	"""
	Learn word transitions from corpus lines.

	Transitions never cross a line boundary. Reading stops once ``word_limit``
	words have been added, counting every word read.

	Returns:
		The number of words read.

	Raises:
		ValueError: ``word_limit`` is given but is not positive.
	"""

	if word_limit is not None and word_limit < 1:
		raise ValueError("Word limit must be positive")

	words_read = 0

	for line in lines:

		if word_limit is not None and words_read >= word_limit:
			break

		words = tokenize(line)

		if word_limit is not None:
			words = words[:word_limit - words_read]

		chain.add_sequence(words)
		words_read += len(words)

	logger.debug(f"Read {words_read} words into {len(chain)} states")

	return words_read


def create_chain (
	lines: typing.Iterable[str],
	word_limit: typing.Optional[int] = None,
	rng: typing.Optional[random.Random] = None
) -> chainwalk.markov_chain.MarkovChain[str]:

	"""
	Create a word chain and fill it from corpus lines.
	"""

	chain: chainwalk.markov_chain.MarkovChain[str] = chainwalk.markov_chain.MarkovChain(WordCapabilities(), rng=rng)

	fill_chain(chain, lines, word_limit=word_limit)

	return chain


def generate_tweets (
	chain: chainwalk.markov_chain.MarkovChain[str],
	count: int,
	max_length: int = MAX_TWEET_LENGTH,
	file: typing.Optional[typing.TextIO] = None
) -> None:

	"""
	Print ``count`` tweets, each starting from a random non-terminal word.

	A tweet that runs into a word with no known successor ends early; the
	remaining tweets are still generated.
	"""

	stream = file if file is not None else sys.stdout

	for number in range(1, count + 1):
		stream.write(f"Tweet {number}: ")

		try:
			for word in chain.generate(max_length=max_length):
				chain.print_payload(word, file=stream)

		except chainwalk.exceptions.DeadEndState as exc:
			logger.warning(f"Tweet {number} ended early: {exc}")

		stream.write("\n")
