"""
The node registry: an insertion-ordered set of unique states.

Uniqueness is decided by the chain's ``compare`` capability rather than by
hashing, so payloads need not be hashable. Lookups are a linear scan.
"""

import dataclasses
import typing

import chainwalk.capabilities
import chainwalk.exceptions


PayloadType = typing.TypeVar("PayloadType")


@dataclasses.dataclass(eq=False)
class State (typing.Generic[PayloadType]):

	"""
	One node of a Markov chain.

	States compare by identity. The registry never holds two states whose
	payloads compare equal, so identity and value equality coincide.

	Attributes:
		index: Stable handle, the state's position in its registry.
		payload: The chain's own copy of the caller's payload.
	"""

	index: int
	payload: PayloadType


class NodeRegistry (typing.Generic[PayloadType]):

	"""Owns every state of a chain, in the order they were first added."""

	def __init__ (self, capabilities: chainwalk.capabilities.Capabilities[PayloadType]) -> None:

		"""
		Create an empty registry that deduplicates with ``capabilities.compare``.
		"""

		self._capabilities = capabilities
		self._states: typing.List[State[PayloadType]] = []


	def __len__ (self) -> int:

		return len(self._states)


	def __iter__ (self) -> typing.Iterator[State[PayloadType]]:

		return iter(self._states)


	def __getitem__ (self, index: int) -> State[PayloadType]:

		return self._states[index]


	def find (self, payload: typing.Optional[PayloadType]) -> typing.Optional[State[PayloadType]]:

		"""
		Return the first state whose payload compares equal, or None.

		An empty registry or a ``None`` payload simply yields None.
		"""

		if payload is None:
			return None

		for state in self._states:
			if self._capabilities.compare(state.payload, payload) == 0:
				return state

		return None


	def add (self, payload: PayloadType) -> State[PayloadType]:

		"""
		Return the state for a payload, creating it on first sight.

		New states hold a copy of the payload made with ``capabilities.copy``;
		the caller's object is never retained.

		Raises:
			ValueError: The payload is None.
			AllocationFailure: The copy or the append ran out of memory, or the
				copy capability returned None.
		"""

		if payload is None:
			raise ValueError("Payload cannot be None")

		existing = self.find(payload)

		if existing is not None:
			return existing

		try:
			owned = self._capabilities.copy(payload)

			if owned is None:
				raise chainwalk.exceptions.AllocationFailure("Payload copy returned nothing")

			state = State(index=len(self._states), payload=owned)
			self._states.append(state)

		except chainwalk.exceptions.AllocationFailure:
			raise

		except MemoryError as exc:
			raise chainwalk.exceptions.AllocationFailure("Could not allocate a new state") from exc

		return state


	def owns (self, state: State[PayloadType]) -> bool:

		"""
		Return True if this exact state object belongs to the registry.
		"""

		return 0 <= state.index < len(self._states) and self._states[state.index] is state


	def clear (self) -> None:

		"""
		Drop every state.
		"""

		self._states.clear()
