"""
Snakes and ladders as a Markov chain.

Every cell of a 100-cell board is a state. A cell at the foot of a ladder or
the head of a snake has a single transition to where it leads; every other
cell can move forward by one die roll (1 to 6) as long as it stays on the
board. Cell 100 ends the game.
"""

import dataclasses
import logging
import random
import sys
import typing

import chainwalk.capabilities
import chainwalk.markov_chain


logger = logging.getLogger(__name__)

BOARD_SIZE = 100
DICE_MAX = 6
MAX_GENERATION_LENGTH = 60

# Each (a, b) pair is a ladder from a up to b when a < b, otherwise a snake down.
TRANSITIONS: typing.Tuple[typing.Tuple[int, int], ...] = (
	(13, 4),
	(85, 17),
	(95, 67),
	(97, 58),
	(66, 89),
	(87, 31),
	(57, 83),
	(91, 25),
	(28, 50),
	(35, 11),
	(8, 30),
	(41, 62),
	(81, 43),
	(69, 32),
	(20, 39),
	(33, 70),
	(79, 99),
	(23, 76),
	(15, 47),
	(61, 14),
)


@dataclasses.dataclass(frozen=True)
class Cell:

	"""
	One square of the board.

	Attributes:
		number: Position on the board, starting at 1.
		ladder_to: Where the ladder starting here leads, if there is one.
		snake_to: Where the snake starting here leads, if there is one.
	"""

	number: int
	ladder_to: typing.Optional[int] = None
	snake_to: typing.Optional[int] = None


	@property
	def jump_to (self) -> typing.Optional[int]:

		"""The destination of this cell's ladder or snake, or None."""

		if self.ladder_to is not None:
			return self.ladder_to

		return self.snake_to


class CellCapabilities (chainwalk.capabilities.Capabilities[Cell]):

	"""Cells are identified by number; the last cell of the board is terminal."""

	def __init__ (self, board_size: int = BOARD_SIZE) -> None:

		self.board_size = board_size


	def copy (self, payload: Cell) -> Cell:

		return dataclasses.replace(payload)


	def compare (self, a: Cell, b: Cell) -> int:

		return a.number - b.number


	def is_terminal (self, payload: Cell) -> bool:

		return payload.number == self.board_size


	def describe (self, payload: Cell) -> str:

		text = f"[{payload.number}]"

		if payload.snake_to is not None:
			text += f"-snake to {payload.snake_to}"

		if payload.ladder_to is not None:
			text += f"-ladder to {payload.ladder_to}"

		if not self.is_terminal(payload):
			text += " -> "

		return text


def create_board (
	transitions: typing.Iterable[typing.Tuple[int, int]] = TRANSITIONS,
	size: int = BOARD_SIZE
) -> typing.List[Cell]:

	"""
	Build the list of cells for a board, numbered from 1.

	Raises:
		ValueError: A transition starts or ends off the board, or goes nowhere.
	"""

	if size < 2:
		raise ValueError("Board needs at least two cells")

	jumps: typing.Dict[int, int] = {}

	for start, end in transitions:

		if not (1 <= start <= size and 1 <= end <= size):
			raise ValueError(f"Transition {start}->{end} leaves the board")

		if start == end:
			raise ValueError(f"Transition {start}->{end} goes nowhere")

		jumps[start] = end

	board: typing.List[Cell] = []

	for number in range(1, size + 1):
		end = jumps.get(number)

		if end is None:
			board.append(Cell(number=number))
		elif number < end:
			board.append(Cell(number=number, ladder_to=end))
		else:
			board.append(Cell(number=number, snake_to=end))

	return board


def create_chain (
	board: typing.Optional[typing.List[Cell]] = None,
	rng: typing.Optional[random.Random] = None
) -> chainwalk.markov_chain.MarkovChain[Cell]:

	"""
	Create a chain and fill it with every move possible on the board.
	"""

	if board is None:
		board = create_board()

	chain: chainwalk.markov_chain.MarkovChain[Cell] = chainwalk.markov_chain.MarkovChain(
		CellCapabilities(board_size=len(board)),
		rng = rng
	)

	fill_chain(chain, board)

	return chain


def fill_chain (chain: chainwalk.markov_chain.MarkovChain[Cell], board: typing.List[Cell]) -> None:

	"""
	Add all cells, then one transition per jump or per reachable die roll.
	"""

	states = [chain.add(cell) for cell in board]

	for index, cell in enumerate(board):
		source = states[index]

		if cell.jump_to is not None:
			chain.record_transition(source, states[cell.jump_to - 1])
			continue

		for roll in range(1, DICE_MAX + 1):
			target_index = index + roll

			if target_index >= len(board):
				break

			chain.record_transition(source, states[target_index])

	logger.debug(f"Board chain built with {len(chain)} cells")


def generate_routes (
	chain: chainwalk.markov_chain.MarkovChain[Cell],
	count: int,
	max_length: int = MAX_GENERATION_LENGTH,
	file: typing.Optional[typing.TextIO] = None
) -> None:

	"""
	Print ``count`` random walks, each starting on the first cell.
	"""

	stream = file if file is not None else sys.stdout
	first = chain.states[0]

	for number in range(1, count + 1):
		stream.write(f"Random Walk {number}: ")

		for cell in chain.generate(start=first, max_length=max_length):
			chain.print_payload(cell, file=stream)

		stream.write("\n")
