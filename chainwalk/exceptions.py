"""Exception types raised by the chain engine."""

import typing


class ChainError (Exception):

	"""Base class for every error raised by a Markov chain."""


class AllocationFailure (ChainError, MemoryError):

	"""
	A payload copy or a storage append could not be satisfied.

	This is fatal for the chain that raised it: the chain has already been
	torn down by the time the caller sees the exception.
	"""


class ChainClosedError (ChainError, RuntimeError):

	"""The chain was used after it had been torn down."""


class DeadEndState (ChainError):

	"""
	A walk reached a non-terminal state that has no outgoing transitions.

	Only the walk in progress is aborted; the chain itself stays usable.
	"""

	def __init__ (self, state: typing.Any) -> None:

		self.state = state

		super().__init__(f"State {state.index} is not terminal but has no outgoing transitions")
