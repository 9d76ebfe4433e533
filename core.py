import logging
import random
from collections import Counter, deque
from typing import Deque, List, Optional, Sequence, Union

from utils import CellGrid

logger = logging.getLogger(__name__)

PREVS_MAX_LENGTH = 10 ** 4

DIRECTIONS = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


class Board:
    """A fixed-size grid of cells, indexed as ``board.get(x, y)`` (column, row)."""

    def __init__(self, grid: Sequence[Sequence[bool]]) -> None:
        if not grid or not grid[0]:
            raise ValueError("Board must have at least one row and one column.")
        width = len(grid[0])
        if any(len(row) != width for row in grid):
            raise ValueError("All board rows must have the same length.")
        self._cells: CellGrid = [[bool(cell) for cell in row] for row in grid]

    def height(self) -> int:
        return len(self._cells)

    def width(self) -> int:
        return len(self._cells[0])

    def rows(self) -> CellGrid:
        """Return a copy of the cells, row-major."""
        return [row[:] for row in self._cells]

    def get(self, x: int, y: int) -> Optional[bool]:
        """Return the cell at column x, row y, or None outside the board."""
        if 0 <= y < len(self._cells) and 0 <= x < len(self._cells[y]):
            return self._cells[y][x]
        return None

    def set(self, x: int, y: int, value: bool) -> None:
        if not (0 <= y < self.height() and 0 <= x < self.width()):
            raise IndexError(f"Cell ({x}, {y}) is outside a {self.width()}x{self.height()} board.")
        self._cells[y][x] = value

    def copy(self) -> "Board":
        return Board(self._cells)

    def load(self, other: "Board") -> None:
        """Overwrite this board's cells with those of a same-shape board."""
        if (other.width(), other.height()) != (self.width(), self.height()):
            raise ValueError("Cannot load a board of a different shape.")
        for row, source in zip(self._cells, other._cells):
            row[:] = source

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(tuple(tuple(row) for row in self._cells))

    def __repr__(self) -> str:
        return f"Board({self._cells!r})"


class Game:
    """
    Game of Life simulation over a single board.

    Death is detected with a bounded window of previous boards: the game is
    dead once the current board equals one still held in the window. Cycles
    longer than ``history_size`` generations are never detected, so
    ``step_until_dead`` does not return for them.
    """

    def __init__(
        self,
        board: Union[Board, Sequence[Sequence[bool]]],
        is_torus: bool = False,
        history_size: int = PREVS_MAX_LENGTH,
    ) -> None:
        if history_size < 1:
            raise ValueError("history_size must be at least 1.")
        if not isinstance(board, Board):
            board = Board(board)

        self.init_board = board.copy()
        self._board = board.copy()
        self._buffer = board.copy()

        self._prevs: Deque[Board] = deque()
        self._prev_hashes: Counter = Counter()
        self._history_size = history_size

        self._is_torus = is_torus
        self._epochs = 0

        logger.debug(
            "New %dx%d game (torus=%s, history=%d)",
            self.width, self.height, is_torus, history_size,
        )

    @classmethod
    def new_random(
        cls,
        width: int,
        height: int,
        is_torus: bool = False,
        rng: Optional[random.Random] = None,
        density: float = 0.5,
        history_size: int = PREVS_MAX_LENGTH,
    ) -> "Game":
        """Create a game whose cells are each live with probability ``density``."""
        if rng is None:
            rng = random.Random()
        grid = [[rng.random() < density for _ in range(width)] for _ in range(height)]
        return cls(Board(grid), is_torus=is_torus, history_size=history_size)

    @property
    def height(self) -> int:
        return self._board.height()

    @property
    def width(self) -> int:
        return self._board.width()

    @property
    def board(self) -> CellGrid:
        return self._board.rows()

    @property
    def epochs(self) -> int:
        return self._epochs

    @property
    def is_torus(self) -> bool:
        return self._is_torus

    @property
    def history_size(self) -> int:
        return self._history_size

    @property
    def history_length(self) -> int:
        return len(self._prevs)

    def check_within_range(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def count_neighbors(self, x: int, y: int) -> int:
        """Count live cells among the eight neighbors of (x, y)."""
        width, height = self.width, self.height
        count = 0
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if self.check_within_range(nx, ny):
                count += self._board.get(nx, ny)
            elif self._is_torus:
                # Python's % already returns a non-negative remainder here
                count += self._board.get(nx % width, ny % height)
        return count

    def step(self) -> None:
        """Advance one generation."""
        self._buffer.load(self._board)
        for y in range(self.height):
            for x in range(self.width):
                neighbor_count = self.count_neighbors(x, y)
                if self._board.get(x, y):
                    if neighbor_count not in (2, 3):
                        self._buffer.set(x, y, False)
                elif neighbor_count == 3:
                    self._buffer.set(x, y, True)

        self._board, self._buffer = self._buffer, self._board
        self._epochs += 1

    def remember(self) -> None:
        """Push the current board onto the history, evicting the oldest if full."""
        snapshot = self._board.copy()
        self._prevs.append(snapshot)
        self._prev_hashes[hash(snapshot)] += 1

        while len(self._prevs) > self._history_size:
            evicted = self._prevs.popleft()
            key = hash(evicted)
            self._prev_hashes[key] -= 1
            if not self._prev_hashes[key]:
                del self._prev_hashes[key]
            logger.debug("History full, evicted board from before epoch %d", self._epochs)

    def is_dead(self) -> bool:
        """True if the current board matches a board still in the history."""
        if hash(self._board) not in self._prev_hashes:
            return False
        return any(prev == self._board for prev in self._prevs)

    def step_until_dead(self) -> None:
        """Step until the board repeats one in the history window."""
        while not self.is_dead():
            self.remember()
            self.step()
        logger.info("Board repeated after %d epochs", self._epochs)

    def reset(self) -> None:
        """Return to the initial board with an empty history."""
        self._board = self.init_board.copy()
        self._buffer = self.init_board.copy()
        self._prevs.clear()
        self._prev_hashes.clear()
        self._epochs = 0

    def history(self) -> List[CellGrid]:
        """Return the retained boards, oldest first."""
        return [prev.rows() for prev in self._prevs]
