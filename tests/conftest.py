import random
import typing

import pytest

import chainwalk.capabilities
import chainwalk.markov_chain


class FailingCopyCapabilities (chainwalk.capabilities.Capabilities[str]):

	"""String capabilities whose copy runs out of memory after a few payloads."""

	def __init__ (self, copies_before_failure: int = 0, return_none: bool = False) -> None:

		"""Allow a number of successful copies before failing."""

		self.copies_left = copies_before_failure
		self.return_none = return_none

	def copy (self, payload: str) -> typing.Optional[str]:

		"""Copy until the budget is spent, then fail."""

		if self.copies_left <= 0:
			if self.return_none:
				return None
			raise MemoryError()

		self.copies_left -= 1
		return str(payload)

	def compare (self, a: str, b: str) -> int:

		"""Three-way string comparison."""

		return chainwalk.capabilities.three_way_compare(a, b)

	def is_terminal (self, payload: str) -> bool:

		"""Words ending in a full stop are terminal."""

		return payload.endswith(".")

	def describe (self, payload: str) -> str:

		"""Describe a word as itself."""

		return payload


class ScriptedRandom (random.Random):

	"""A generator that answers randrange() from a fixed list and refuses every other draw."""

	def __init__ (self, rolls: typing.List[int]) -> None:

		"""Store the rolls to hand out, in order."""

		super().__init__(0)
		self.rolls = list(rolls)
		self.bounds: typing.List[int] = []

	def randrange (self, start: int, stop: typing.Optional[int] = None, step: int = 1) -> int:

		"""Return the next scripted roll, checking it fits in [0, start)."""

		assert stop is None and step == 1, "only randrange(n) is expected"
		assert self.rolls, "more draws than scripted"

		roll = self.rolls.pop(0)
		assert 0 <= roll < start, f"roll {roll} outside [0, {start})"

		self.bounds.append(start)
		return roll

	def random (self) -> float:

		"""Fail on float draws (uniform, choice weights and friends)."""

		raise AssertionError("unexpected float draw")


@pytest.fixture
def rng () -> random.Random:

	"""A seeded generator so walks are repeatable."""

	return random.Random(1234)


@pytest.fixture
def word_capabilities () -> chainwalk.capabilities.FunctionCapabilities:

	"""Capabilities for plain string words ending a walk on a full stop."""

	return chainwalk.capabilities.FunctionCapabilities(is_terminal=lambda word: word.endswith("."))


@pytest.fixture
def word_chain (word_capabilities: chainwalk.capabilities.FunctionCapabilities, rng: random.Random) -> chainwalk.markov_chain.MarkovChain:

	"""An empty word chain with a seeded generator."""

	return chainwalk.markov_chain.MarkovChain(word_capabilities, rng=rng)
