import logging
import random
import typing

import chainwalk.capabilities
import chainwalk.exceptions
import chainwalk.random_walk
import chainwalk.registry
import chainwalk.transition_table


logger = logging.getLogger(__name__)

PayloadType = typing.TypeVar("PayloadType")
StateOrPayload = typing.Union[chainwalk.registry.State, typing.Any]

DEFAULT_MAX_LENGTH = 60


class MarkovChain (typing.Generic[PayloadType]):

	"""
	A weighted Markov chain over arbitrary payloads.

	The chain owns a registry of unique states and a table of observed
	transition counts. Both are filled during a build phase and only read
	while generating walks. Running out of memory while building tears the
	whole chain down; there is no partial recovery.

	Example:
		```python
		caps = chainwalk.capabilities.FunctionCapabilities(is_terminal=lambda w: w.endswith("."))
		chain = MarkovChain(caps, rng=random.Random(42))
		chain.add_sequence(["the", "cat", "sat."])
		print(list(chain.generate(start="the", max_length=10)))
		```
	"""

	def __init__ (
		self,
		capabilities: chainwalk.capabilities.Capabilities[PayloadType],
		rng: typing.Optional[random.Random] = None
	) -> None:

		"""
		Create an empty chain bound to a fixed set of payload capabilities.

		Parameters:
			capabilities: Copy, compare, terminal and print operations for the
				payload type. These never change for the life of the chain.
			rng: Random generator shared by every walk (default: a fresh,
				unseeded ``random.Random``). Pass a seeded one for repeatable output.
		"""

		self.capabilities = capabilities
		self.rng = rng or random.Random()

		self._registry: chainwalk.registry.NodeRegistry[PayloadType] = chainwalk.registry.NodeRegistry(capabilities)
		self._table = chainwalk.transition_table.TransitionTable()
		self._closed = False


	def __len__ (self) -> int:

		self._check_open()

		return len(self._registry)


	def __iter__ (self) -> typing.Iterator[chainwalk.registry.State[PayloadType]]:

		self._check_open()

		return iter(self._registry)


	def __enter__ (self) -> "MarkovChain[PayloadType]":

		return self


	def __exit__ (self, *exc_info: typing.Any) -> None:

		if not self._closed:
			self.teardown()


	@property
	def closed (self) -> bool:

		"""True once the chain has been torn down."""

		return self._closed


	@property
	def states (self) -> typing.Tuple[chainwalk.registry.State[PayloadType], ...]:

		"""All states in insertion order."""

		self._check_open()

		return tuple(self._registry)


	# --- Build phase ---


	def find (self, payload: typing.Optional[PayloadType]) -> typing.Optional[chainwalk.registry.State[PayloadType]]:

		"""
		Return the state holding an equal payload, or None.
		"""

		self._check_open()

		return self._registry.find(payload)


	def add (self, payload: PayloadType) -> chainwalk.registry.State[PayloadType]:

		"""
		Return the state for a payload, adding a copy of it if it is new.

		Raises:
			AllocationFailure: The chain has been torn down as a result.
		"""

		self._check_open()

		try:
			return self._registry.add(payload)

		except chainwalk.exceptions.AllocationFailure:
			self._abort("adding a state")
			raise


	def record_transition (
		self,
		source: chainwalk.registry.State[PayloadType],
		target: chainwalk.registry.State[PayloadType]
	) -> None:

		"""
		Count one observed transition between two states of this chain.

		Raises:
			ValueError: Either state belongs to a different chain.
			AllocationFailure: The chain has been torn down as a result.
		"""

		self._check_open()

		if not self._registry.owns(source) or not self._registry.owns(target):
			raise ValueError("Both states must belong to this chain")

		try:
			self._table.record_transition(source, target)

		except chainwalk.exceptions.AllocationFailure:
			self._abort("recording a transition")
			raise


	def add_sequence (self, payloads: typing.Iterable[PayloadType]) -> typing.List[chainwalk.registry.State[PayloadType]]:

		"""
		Add each payload and record the transition between every consecutive pair.

		Returns the states in the order the payloads were given.
		"""

		states: typing.List[chainwalk.registry.State[PayloadType]] = []

		for payload in payloads:
			state = self.add(payload)

			if states:
				self.record_transition(states[-1], state)

			states.append(state)

		return states


	# --- Queries ---


	def edges (self, state: chainwalk.registry.State[PayloadType]) -> typing.List[chainwalk.transition_table.Edge]:

		"""
		Return the outgoing edges of a state, in the order they were first observed.
		"""

		self._check_open()

		return self._table.edges(state)


	def total_weight (self, state: chainwalk.registry.State[PayloadType]) -> int:

		"""
		Return the number of observed transitions leaving a state.
		"""

		self._check_open()

		return self._table.total_weight(state)


	def is_terminal (self, state: chainwalk.registry.State[PayloadType]) -> bool:

		self._check_open()

		return self.capabilities.is_terminal(state.payload)


	def print_payload (self, payload: PayloadType, file: typing.Optional[typing.TextIO] = None) -> None:

		"""
		Write a payload using the chain's print capability.
		"""

		self._check_open()

		self.capabilities.print(payload, file=file)


	# --- Generation ---


	def random_state (self) -> chainwalk.registry.State[PayloadType]:

		"""
		Pick a uniformly random non-terminal state.

		The chain must contain at least one non-terminal state.
		"""

		self._check_open()

		return chainwalk.random_walk.choose_start(self._registry, self.capabilities, self.rng)


	def next_state (self, state: chainwalk.registry.State[PayloadType]) -> chainwalk.registry.State[PayloadType]:

		"""
		Sample one successor of a state, weighted by observation counts.

		Raises:
			DeadEndState: The state has no outgoing transitions.
		"""

		self._check_open()

		return chainwalk.random_walk.choose_next(self._table, state, self.rng)


	def generate (
		self,
		start: typing.Optional[StateOrPayload] = None,
		max_length: int = DEFAULT_MAX_LENGTH,
		rng: typing.Optional[random.Random] = None
	) -> chainwalk.random_walk.RandomWalk:

		"""
		Start a new random walk.

		Parameters:
			start: A state of this chain, a payload equal to one, or None to
				begin at a random non-terminal state.
			max_length: Maximum number of payloads the walk may emit.
			rng: Override the chain's generator for this walk only.

		Raises:
			ValueError: ``start`` is not in the chain, or ``max_length`` < 1.
		"""

		self._check_open()

		start_state = self._resolve_start(start)

		return chainwalk.random_walk.RandomWalk(
			registry = self._registry,
			table = self._table,
			capabilities = self.capabilities,
			rng = rng or self.rng,
			max_length = max_length,
			start = start_state,
			is_closed = lambda: self._closed
		)


	# --- Lifecycle ---


	def teardown (self) -> None:

		"""
		Release every state and edge. The chain cannot be used afterwards.
		"""

		self._check_open()

		logger.debug(f"Tearing down chain with {len(self._registry)} states")

		self._table.clear()
		self._registry.clear()
		self._closed = True


	def _abort (self, action: str) -> None:

		"""Tear the chain down after an allocation failure."""

		logger.error(f"Allocation failure while {action}; tearing down the chain")

		self.teardown()


	def _check_open (self) -> None:

		if self._closed:
			raise chainwalk.exceptions.ChainClosedError("The chain has been torn down")


	def _resolve_start (self, start: typing.Optional[StateOrPayload]) -> typing.Optional[chainwalk.registry.State[PayloadType]]:

		if start is None:
			return None

		if isinstance(start, chainwalk.registry.State):

			if not self._registry.owns(start):
				raise ValueError("Start state belongs to a different chain")

			return start

		state = self._registry.find(start)

		if state is None:
			raise ValueError(f"Start payload {start!r} is not in the chain")

		return state
