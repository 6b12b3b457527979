"""
Board representation for TicTacToe.
A board is an immutable snapshot of 9 cells in row-major order.
"""

from enum import Enum
from typing import Optional, List, Tuple


class Symbol(Enum):
    """The two marks that can be placed on the board."""
    FIRST = "X"
    SECOND = "O"

    def opposite(self) -> "Symbol":
        """Get the opposite symbol."""
        return Symbol.SECOND if self == Symbol.FIRST else Symbol.FIRST


# A cell is None when empty, otherwise the Symbol placed there
Cell = Optional[Symbol]
Board = Tuple[Cell, ...]

BOARD_SIZE = 3
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE


def new_board() -> Board:
    """Create an empty board."""
    return (None,) * BOARD_CELLS


def place(board: Board, index: int, symbol: Symbol) -> Board:
    """
    Return a new board with symbol placed at index.

    Args:
        board: The board to copy.
        index: Cell index (0-8).
        symbol: The mark to place.

    Returns:
        The new board. The original board is left untouched.

    Raises:
        ValueError: If index is out of range or the cell is occupied.
    """
    if not 0 <= index < BOARD_CELLS:
        raise ValueError(f"Invalid cell {index}. Must be 0-{BOARD_CELLS - 1}.")
    if board[index] is not None:
        raise ValueError(f"Cell {index} is already occupied by {board[index].value}")

    cells = list(board)
    cells[index] = symbol
    return tuple(cells)


def empty_cells(board: Board) -> List[int]:
    """Get the indices of all empty cells, in ascending order."""
    return [i for i, cell in enumerate(board) if cell is None]


def is_empty_board(board: Board) -> bool:
    """True if no mark has been placed yet."""
    return all(cell is None for cell in board)


def board_from_string(text: str) -> Board:
    """
    Build a board from a compact string such as "XX_OO____".

    Whitespace, '|' and '/' are ignored so rows can be separated.
    '_', '.' and '-' mean an empty cell.
    """
    cells = []
    for char in text:
        if char in " \n\t|/":
            continue
        if char in "_.-":
            cells.append(None)
        else:
            cells.append(Symbol(char.upper()))

    if len(cells) != BOARD_CELLS:
        raise ValueError(f"Expected {BOARD_CELLS} cells, got {len(cells)} in {text!r}")

    return tuple(cells)


def format_board(board: Board, show_indices: bool = False) -> str:
    """
    Render the board as text.

    Args:
        board: The board to render.
        show_indices: Show 1-9 in empty cells (handy for console input).
    """
    rows = []
    for row in range(BOARD_SIZE):
        cells = []
        for col in range(BOARD_SIZE):
            index = row * BOARD_SIZE + col
            cell = board[index]
            if cell is not None:
                cells.append(cell.value)
            elif show_indices:
                cells.append(str(index + 1))
            else:
                cells.append(" ")
        rows.append(" " + " | ".join(cells))

    return "\n---+---+---\n".join(rows)
