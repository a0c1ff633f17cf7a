"""
Payload capabilities supplied to a chain when it is created.

The engine never inspects payloads directly. Everything it needs to know about
them comes from a :class:`Capabilities` object bound to the chain for its whole
lifetime: how to copy a payload into the chain, how to decide that two payloads
are the same state, whether a payload ends a walk, and how to print it.
"""

import abc
import copy as copy_module
import sys
import typing


PayloadType = typing.TypeVar("PayloadType")


def three_way_compare (a: typing.Any, b: typing.Any) -> int:

	"""
	Compare two values the way ``strcmp`` does: negative, zero or positive.
	"""

	if a == b:
		return 0

	try:
		return -1 if a < b else 1

	except TypeError:
		# Values that cannot be ordered (e.g. a str against an int) are simply unequal.
		return 1


class Capabilities (abc.ABC, typing.Generic[PayloadType]):

	"""Abstract set of payload operations a chain is built around."""

	@abc.abstractmethod
	def copy (self, payload: PayloadType) -> PayloadType:

		"""Return a deep copy of the payload for the chain to own."""

		...

	@abc.abstractmethod
	def compare (self, a: PayloadType, b: PayloadType) -> int:

		"""Return zero when both payloads denote the same state."""

		...

	@abc.abstractmethod
	def is_terminal (self, payload: PayloadType) -> bool:

		"""Return True when a walk must stop after emitting this payload."""

		...

	@abc.abstractmethod
	def describe (self, payload: PayloadType) -> str:

		"""Return the text written by :meth:`print` for this payload."""

		...


	def print (self, payload: PayloadType, file: typing.Optional[typing.TextIO] = None) -> None:

		"""
		Write the payload's description without a trailing newline.
		"""

		stream = file if file is not None else sys.stdout
		stream.write(self.describe(payload))


class FunctionCapabilities (Capabilities[PayloadType]):

	"""
	Capabilities assembled from plain callables.

	Handy for simple payload types (strings, numbers, tuples) where writing a
	subclass would be overkill.

	Example:
		```python
		caps = FunctionCapabilities(is_terminal=lambda word: word.endswith("."))
		```
	"""

	def __init__ (
		self,
		is_terminal: typing.Callable[[PayloadType], bool],
		copy: typing.Optional[typing.Callable[[PayloadType], PayloadType]] = None,
		compare: typing.Optional[typing.Callable[[PayloadType, PayloadType], int]] = None,
		describe: typing.Optional[typing.Callable[[PayloadType], str]] = None
	) -> None:

		"""
		Store the callables, falling back to deep copy, three-way compare and ``str``.
		"""

		self._is_terminal = is_terminal
		self._copy = copy or copy_module.deepcopy
		self._compare = compare or three_way_compare
		self._describe = describe or str


	def copy (self, payload: PayloadType) -> PayloadType:

		return self._copy(payload)


	def compare (self, a: PayloadType, b: PayloadType) -> int:

		return self._compare(a, b)


	def is_terminal (self, payload: PayloadType) -> bool:

		return bool(self._is_terminal(payload))


	def describe (self, payload: PayloadType) -> str:

		return self._describe(payload)
