import random

import pytest

import chainwalk
import chainwalk.exceptions
import chainwalk.markov_chain
import chainwalk.random_walk

import conftest


def _build (chain: chainwalk.markov_chain.MarkovChain, *sentences: str) -> None:

	"""Learn each space-separated sentence into the chain."""

	for sentence in sentences:
		chain.add_sequence(sentence.split())


def test_linear_chain_walk (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""a -> b -> c. walked from a yields exactly the three words."""

	_build(word_chain, "a b c.")

	assert list(word_chain.generate(start="a", max_length=5)) == ["a", "b", "c."]


def test_start_may_be_a_state (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""A walk can start from a state object as well as a payload."""

	a, _, _ = word_chain.add_sequence(["a", "b", "c."])

	assert list(word_chain.generate(start=a, max_length=5)) == ["a", "b", "c."]


def test_walk_from_terminal_state_emits_one_element (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""A terminal start ends the walk immediately, even if it has successors."""

	_build(word_chain, "end. a b")

	assert list(word_chain.generate(start="end.", max_length=10)) == ["end."]


def test_walk_respects_max_length (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""A cycle with no terminal state is cut off at the length cap."""

	_build(word_chain, "a b a b a")

	for max_length in [1, 2, 7]:
		walk = list(word_chain.generate(start="a", max_length=max_length))

		assert len(walk) == max_length
		assert walk[:2] == ["a", "b"][:max_length]


def test_max_length_must_be_positive (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""A walk must be allowed to emit at least its start."""

	_build(word_chain, "a b.")

	with pytest.raises(ValueError):
		word_chain.generate(start="a", max_length=0)


def test_unknown_start_payload_raises (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""Starting from a payload the chain has never seen is an error."""

	_build(word_chain, "a b.")

	with pytest.raises(ValueError):
		word_chain.generate(start="zebra")


def test_walk_is_not_restartable (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""Once exhausted, a walk stays empty."""

	_build(word_chain, "a b.")

	walk = word_chain.generate(start="a")

	assert list(walk) == ["a", "b."]
	assert list(walk) == []
	assert walk.status is chainwalk.random_walk.WalkStatus.TERMINATED


def test_walk_status_transitions (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""A walk moves from not started, to walking, to terminated."""

	_build(word_chain, "a b c.")

	walk = word_chain.generate(start="a")
	assert walk.status is chainwalk.random_walk.WalkStatus.NOT_STARTED

	assert next(walk) == "a"
	assert walk.status is chainwalk.random_walk.WalkStatus.WALKING

	assert next(walk) == "b"
	assert next(walk) == "c."
	assert walk.status is chainwalk.random_walk.WalkStatus.TERMINATED

	with pytest.raises(StopIteration):
		next(walk)


def test_walk_states_yields_state_objects (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""The states() view yields the chain's own state objects."""

	states = word_chain.add_sequence(["a", "b", "c."])

	assert list(word_chain.generate(start="a").states()) == states


def test_dead_end_terminates_only_the_walk (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""Hitting a non-terminal state with no successors ends that walk with an error."""

	_build(word_chain, "a b")

	walk = word_chain.generate(start="a")
	emitted = []

	with pytest.raises(chainwalk.DeadEndState) as info:
		for word in walk:
			emitted.append(word)

	assert emitted == ["a", "b"]
	assert info.value.state.payload == "b"
	assert walk.status is chainwalk.random_walk.WalkStatus.TERMINATED

	# The chain is still usable afterwards.
	assert not word_chain.closed
	assert list(word_chain.generate(start="a", max_length=1)) == ["a"]


def test_random_start_never_terminal (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""Walks without an explicit start never begin on a terminal word."""

	_build(word_chain, "the cat sat.", "a dog ran.", "the dog sat.")

	for _ in range(30):
		walk = list(word_chain.generate(max_length=10))

		assert not walk[0].endswith(".")
		assert walk[-1].endswith(".")


def test_same_seed_gives_same_walks (word_capabilities: chainwalk.capabilities.FunctionCapabilities) -> None:

	"""With a fixed seed the whole sequence of walks is reproducible."""

	def run (seed: int) -> list:

		chain = chainwalk.MarkovChain(word_capabilities, rng=random.Random(seed))
		_build(chain, "the cat sat on the mat.", "the dog sat on the cat.", "a cat ran to the dog.")

		return [list(chain.generate(max_length=15)) for _ in range(10)]

	assert run(42) == run(42)


def test_rng_override_per_walk (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""A walk can draw from its own generator instead of the chain's."""

	_build(word_chain, "a b a c a d a e.")

	first = list(word_chain.generate(start="a", max_length=30, rng=random.Random(5)))
	second = list(word_chain.generate(start="a", max_length=30, rng=random.Random(5)))

	assert first == second


def test_walk_only_follows_observed_transitions (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""Every consecutive pair in a walk is an edge of the chain."""

	_build(word_chain, "the cat sat on the mat.", "the dog sat on the cat.")

	for _ in range(20):
		walk = list(word_chain.generate(start="the", max_length=20).states())

		for source, target in zip(walk, walk[1:]):
			assert any(edge.target is target for edge in word_chain.edges(source))


def test_walk_from_given_start_matches_expected_sequence (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""Scripted rolls pick edges in insertion order: the -> dog -> sat -> on -> the -> cat."""

	_build(word_chain, "the cat sat on the mat.", "the dog sat on the cat.")

	# the: [cat, mat., dog, cat.]; dog: [sat]; sat: [on x2]; on: [the x2]
	rng = conftest.ScriptedRandom([2, 0, 1, 0, 3])

	walk = list(word_chain.generate(start="the", max_length=20, rng=rng))

	assert walk == ["the", "dog", "sat", "on", "the", "cat."]
	assert rng.bounds == [4, 1, 2, 2, 4]
	assert rng.rolls == []


def test_walk_from_random_start_matches_expected_sequence (word_chain: chainwalk.markov_chain.MarkovChain) -> None:

	"""Start selection redraws past terminal states before the walk begins."""

	_build(word_chain, "the cat sat on the mat.", "the dog sat on the cat.")

	# Registry order: the, cat, sat, on, mat., dog, cat. - index 4 is terminal and is skipped.
	rng = conftest.ScriptedRandom([4, 5, 0, 0, 1, 1])

	walk = list(word_chain.generate(max_length=20, rng=rng))

	assert walk == ["dog", "sat", "on", "the", "mat."]
	assert rng.bounds == [7, 7, 1, 2, 2, 4]
	assert rng.rolls == []


def test_walk_after_teardown_raises_chain_closed (word_capabilities: chainwalk.capabilities.FunctionCapabilities) -> None:

	"""A walk outliving its chain reports the closed chain, not a dead end."""

	with chainwalk.MarkovChain(word_capabilities, rng=random.Random(3)) as chain:
		_build(chain, "a b c.")
		started = chain.generate(start="a")
		assert next(started) == "a"
		unstarted = chain.generate()

	with pytest.raises(chainwalk.exceptions.ChainClosedError):
		next(started)

	with pytest.raises(chainwalk.exceptions.ChainClosedError):
		next(unstarted)

	assert started.status is chainwalk.random_walk.WalkStatus.TERMINATED
	assert list(started) == []


def test_finished_walk_stays_finished_after_teardown (word_capabilities: chainwalk.capabilities.FunctionCapabilities) -> None:

	"""Tearing down the chain does not disturb a walk that already ended."""

	with chainwalk.MarkovChain(word_capabilities) as chain:
		_build(chain, "a b.")
		walk = chain.generate(start="a")
		assert list(walk) == ["a", "b."]

	assert list(walk) == []
