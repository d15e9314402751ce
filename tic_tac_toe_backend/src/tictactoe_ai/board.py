"""
The 3x3 grid and its legality checks.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import CellOccupiedError, OutOfBoundsError
from .models import Side

SIZE = 3


class BoardState:
    """
    Row-major 3x3 grid of cells, each empty (None) or holding a Side.

    A cell is written at most once until it is cleared or the board is reset.
    """

    def __init__(self):
        self._cells: List[List[Optional[Side]]] = [[None for _ in range(SIZE)] for _ in range(SIZE)]

    # PUBLIC_INTERFACE
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[str]]]) -> "BoardState":
        """Build a board from rows of 'X', 'O', '' or None."""
        if len(rows) != SIZE or any(len(r) != SIZE for r in rows):
            raise ValueError("Board must be 3x3.")
        board = cls()
        for row, values in enumerate(rows):
            for col, value in enumerate(values):
                if value:
                    board.place(row, col, Side(value))
        return board

    @staticmethod
    def _check_bounds(row: int, col: int) -> None:
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            raise OutOfBoundsError(row, col)

    def get(self, row: int, col: int) -> Optional[Side]:
        self._check_bounds(row, col)
        return self._cells[row][col]

    # PUBLIC_INTERFACE
    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) is None

    # PUBLIC_INTERFACE
    def place(self, row: int, col: int, side: Side) -> None:
        """
        Write `side` at (row, col).
        Raises OutOfBoundsError or CellOccupiedError and leaves the board untouched if invalid.
        """
        self._check_bounds(row, col)
        if self._cells[row][col] is not None:
            raise CellOccupiedError(row, col)
        self._cells[row][col] = side

    def clear(self, row: int, col: int) -> None:
        """Remove a mark. Only the search's undo step uses this."""
        self._check_bounds(row, col)
        self._cells[row][col] = None

    # PUBLIC_INTERFACE
    def empty_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield unoccupied coordinates, row outer and column inner."""
        for row in range(SIZE):
            for col in range(SIZE):
                if self._cells[row][col] is None:
                    yield row, col

    def rows(self) -> Tuple[Tuple[Optional[Side], ...], ...]:
        """Read-only view of the grid."""
        return tuple(tuple(line) for line in self._cells)

    def is_full(self) -> bool:
        return all(cell is not None for line in self._cells for cell in line)

    # PUBLIC_INTERFACE
    def reset(self) -> None:
        for line in self._cells:
            for col in range(SIZE):
                line[col] = None

    def snapshot(self) -> List[List[str]]:
        return [[cell.value if cell is not None else "" for cell in line] for line in self._cells]

    def copy(self) -> "BoardState":
        board = BoardState()
        board._cells = [list(line) for line in self._cells]
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"BoardState({self.snapshot()!r})"
