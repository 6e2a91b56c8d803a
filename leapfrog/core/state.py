from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

BoardArray = NDArray[np.int8]

HOME_ROWS = 3
HOME_COLS = 4

# North, East, South, West
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


class Piece(IntEnum):
    NONE = 0
    PLAYER = 1
    OPPONENT = 2

    @property
    def other(self) -> "Piece":
        if self == Piece.PLAYER:
            return Piece.OPPONENT
        if self == Piece.OPPONENT:
            return Piece.PLAYER
        return Piece.NONE


@dataclass(frozen=True)
class BoardPosition:
    row: int
    col: int

    def offset(self, dr: int, dc: int) -> "BoardPosition":
        return BoardPosition(self.row + dr, self.col + dc)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class Move:
    src: BoardPosition
    dest: BoardPosition
    piece: Piece

    @property
    def distance(self) -> int:
        return manhattan_distance(self.src, self.dest)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.src.row, self.src.col, self.dest.row, self.dest.col)


@dataclass(frozen=True)
class Region:
    """Half-open rectangle ``rows x cols`` on the board."""

    row_start: int
    row_stop: int
    col_start: int
    col_stop: int

    def __contains__(self, position: BoardPosition) -> bool:
        return (
            self.row_start <= position.row < self.row_stop
            and self.col_start <= position.col < self.col_stop
        )

    def positions(self) -> Iterator[BoardPosition]:
        for row in range(self.row_start, self.row_stop):
            for col in range(self.col_start, self.col_stop):
                yield BoardPosition(row, col)


def home_region(piece: Piece, size: int) -> Region:
    if piece == Piece.PLAYER:
        return Region(size - HOME_ROWS, size, 0, HOME_COLS)
    if piece == Piece.OPPONENT:
        return Region(0, HOME_ROWS, size - HOME_COLS, size)
    raise ValueError("Piece.NONE has no home region.")


def target_region(piece: Piece, size: int) -> Region:
    return home_region(piece.other, size)


@dataclass
class Board:
    size: int
    cells: BoardArray  # shape (size, size), dtype=np.int8, values are Piece
    turn: Piece = Piece.PLAYER
    move_stack: List[Move] = field(default_factory=list)

    @classmethod
    def empty(cls, size: int = 8) -> "Board":
        return cls(size=size, cells=np.zeros((size, size), dtype=np.int8))

    def copy(self) -> "Board":
        return Board(
            size=self.size,
            cells=self.cells.copy(),
            turn=self.turn,
            move_stack=list(self.move_stack),
        )

    def piece_at(self, position: BoardPosition) -> Piece:
        return Piece(int(self.cells[position.row, position.col]))

    def set_piece(self, position: BoardPosition, piece: Piece) -> None:
        self.cells[position.row, position.col] = int(piece)

    def is_empty(self, position: BoardPosition) -> bool:
        return self.cells[position.row, position.col] == Piece.NONE

    def in_bounds(self, position: BoardPosition) -> bool:
        return 0 <= position.row < self.size and 0 <= position.col < self.size

    def positions_for_piece(self, piece: Piece) -> List[BoardPosition]:
        # np.argwhere scans in row-major order
        return [BoardPosition(int(r), int(c)) for r, c in np.argwhere(self.cells == int(piece))]

    def neighbours(self, position: BoardPosition) -> List[BoardPosition]:
        return self._ring(position, 1)

    def extended_neighbours(self, position: BoardPosition) -> List[BoardPosition]:
        return self._ring(position, 2)

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_stack[-1] if self.move_stack else None

    def _ring(self, position: BoardPosition, distance: int) -> List[BoardPosition]:
        candidates = (position.offset(dr * distance, dc * distance) for dr, dc in DIRECTIONS)
        return [candidate for candidate in candidates if self.in_bounds(candidate)]

    def __repr__(self) -> str:
        board_str = "\n".join(" ".join(str(cell) for cell in row) for row in self.cells)
        return f"Board(turn={self.turn.name}, moves={len(self.move_stack)})\n{board_str}"


def manhattan_distance(src: BoardPosition, dest: BoardPosition) -> int:
    return abs(src.row - dest.row) + abs(src.col - dest.col)


def euclidean_distance(src: Tuple[float, float], dest: Tuple[float, float]) -> float:
    return math.hypot(src[0] - dest[0], src[1] - dest[1])


def average_position(board: Board, piece: Piece) -> Optional[Tuple[float, float]]:
    """Mean ``(row, col)`` of ``piece`` on the board, ``None`` if it has no pieces."""
    positions = np.argwhere(board.cells == int(piece))
    if len(positions) == 0:
        return None
    mean = positions.mean(axis=0)
    return (float(mean[0]), float(mean[1]))
