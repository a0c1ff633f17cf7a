"""
Weighted random walks over a built chain.

A :class:`RandomWalk` is a one-shot iterator: it emits the start payload, then
keeps sampling successors in proportion to their observation counts until it
emits a terminal payload or reaches its length cap. Ask the chain for a new
walk to get another, independent realization.
"""

import enum
import logging
import random
import typing

import chainwalk.capabilities
import chainwalk.exceptions
import chainwalk.registry
import chainwalk.transition_table


logger = logging.getLogger(__name__)


class WalkStatus (enum.Enum):

	"""Lifecycle of a single walk."""

	NOT_STARTED = "not_started"
	WALKING = "walking"
	TERMINATED = "terminated"


def choose_start (
	registry: chainwalk.registry.NodeRegistry,
	capabilities: chainwalk.capabilities.Capabilities,
	rng: random.Random
) -> chainwalk.registry.State:

	"""
	Pick a uniformly random non-terminal state.

	Draws indices until one lands on a state that is not terminal. The registry
	must hold at least one non-terminal state, otherwise this never returns.

	Raises:
		ValueError: The registry is empty.
	"""

	if len(registry) == 0:
		raise ValueError("Cannot choose a start state from an empty chain")

	while True:
		state = registry[rng.randrange(len(registry))]

		if not capabilities.is_terminal(state.payload):
			return state


def choose_next (
	table: chainwalk.transition_table.TransitionTable,
	state: chainwalk.registry.State,
	rng: random.Random
) -> chainwalk.registry.State:

	"""
	Sample a successor of ``state`` with probability ``count / total_weight``.

	Raises:
		DeadEndState: The state has no outgoing edges.
	"""

	total = table.total_weight(state)

	if total <= 0:
		raise chainwalk.exceptions.DeadEndState(state)

	roll = rng.randrange(total)

	for edge in table.edges(state):
		if roll < edge.count:
			return edge.target
		roll -= edge.count

	# Unreachable while total_weight agrees with the edge list.
	raise RuntimeError("Roll exceeded the total edge weight")


class RandomWalk:

	"""
	A lazy, finite, non-restartable sequence of payloads.

	Both stopping conditions are checked after each emission, so a terminal
	payload is always the last element when it is reached, and no walk ever
	yields more than ``max_length`` payloads.
	"""

	def __init__ (
		self,
		registry: chainwalk.registry.NodeRegistry,
		table: chainwalk.transition_table.TransitionTable,
		capabilities: chainwalk.capabilities.Capabilities,
		rng: random.Random,
		max_length: int,
		start: typing.Optional[chainwalk.registry.State] = None,
		is_closed: typing.Optional[typing.Callable[[], bool]] = None
	) -> None:

		"""
		Prepare a walk. Nothing is drawn from ``rng`` until iteration begins.

		Parameters:
			registry: States to choose a random start from.
			table: Transition counts to sample successors from.
			capabilities: Supplies the terminal-state predicate.
			rng: Source of all random draws for this walk.
			max_length: Maximum number of payloads to emit (at least 1).
			start: Explicit first state, or None to pick a random non-terminal one.
			is_closed: Reports whether the owning chain has been torn down.
		"""

		if max_length < 1:
			raise ValueError("Maximum walk length must be at least 1")

		self._registry = registry
		self._table = table
		self._capabilities = capabilities
		self._rng = rng
		self._start = start
		self._is_closed = is_closed

		self.max_length = max_length
		self.status = WalkStatus.NOT_STARTED
		self.current: typing.Optional[chainwalk.registry.State] = None
		self.emitted = 0


	def __iter__ (self) -> "RandomWalk":

		return self


	def __next__ (self) -> typing.Any:

		"""
		Emit the next payload, or stop once the walk has terminated.
		"""

		if self.status is WalkStatus.TERMINATED:
			raise StopIteration

		if self._is_closed is not None and self._is_closed():
			self.status = WalkStatus.TERMINATED
			raise chainwalk.exceptions.ChainClosedError("The chain was torn down during the walk")

		try:
			if self.status is WalkStatus.NOT_STARTED:
				state = self._start
				if state is None:
					state = choose_start(self._registry, self._capabilities, self._rng)
				self.status = WalkStatus.WALKING

			else:
				state = choose_next(self._table, self.current, self._rng)

		except chainwalk.exceptions.DeadEndState:
			self.status = WalkStatus.TERMINATED
			logger.debug(f"Walk stopped at a dead end after {self.emitted} states")
			raise

		self.current = state
		self.emitted += 1

		if self._capabilities.is_terminal(state.payload) or self.emitted >= self.max_length:
			self.status = WalkStatus.TERMINATED

		return state.payload


	def states (self) -> typing.Iterator[chainwalk.registry.State]:

		"""
		Iterate the walk yielding states instead of payloads.
		"""

		for _ in self:
			yield self.current
