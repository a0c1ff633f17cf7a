import dataclasses
import typing

import chainwalk.exceptions
import chainwalk.registry


@dataclasses.dataclass
class Edge:

	"""
	A weighted transition to ``target``, observed ``count`` times.
	"""

	target: chainwalk.registry.State
	count: int = 1


class TransitionTable:

	"""
	Sparse per-state edge lists, built up as transitions are observed.

	Each source keeps a plain list of edges in the order they were first seen.
	Fan-out per state is small, so lookups scan the list.
	"""

	def __init__ (self) -> None:

		"""
		Initialize an empty table.
		"""

		self._edges: typing.Dict[chainwalk.registry.State, typing.List[Edge]] = {}


	def record_transition (self, source: chainwalk.registry.State, target: chainwalk.registry.State) -> None:

		"""
		Count one observation of ``source`` -> ``target``.

		Targets are matched by identity. Repeated observations increment the
		existing edge; an edge is never removed or duplicated.
		"""

		try:
			edges = self._edges.get(source)

			if edges is None:
				self._edges[source] = [Edge(target=target, count=1)]
				return

			for edge in edges:
				if edge.target is target:
					edge.count += 1
					return

			edges.append(Edge(target=target, count=1))

		except MemoryError as exc:
			raise chainwalk.exceptions.AllocationFailure("Could not grow the edge list") from exc


	def edges (self, source: chainwalk.registry.State) -> typing.List[Edge]:

		"""
		Return the outgoing edges of a source, in insertion order.
		"""

		return list(self._edges.get(source, []))


	def total_weight (self, source: chainwalk.registry.State) -> int:

		"""
		Return the sum of outgoing edge counts (0 for a state with no edges).
		"""

		return sum(edge.count for edge in self._edges.get(source, []))


	def clear (self) -> None:

		self._edges.clear()
