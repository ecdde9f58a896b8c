"""Line windows and tactical shape recognition.

A window is the 9-cell line through a cell along one axis, encoded from one
player's point of view:

    '1'  own stone
    '0'  empty
    'x'  opponent stone or off the board (a wall blocks like a stone)

Shapes are found by plain substring containment. Counts are per window and
summed over axes and cells by the caller, so one physical shape seen from
several of its stones is counted once per stone.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Tuple

from gomoku.core.board import Board, Player

OWN = "1"
EMPTY = "0"
BLOCKED = "x"
WINDOW_RADIUS = 4

FIVE = "11111"
OPEN_FOUR = "011110"
OPEN_THREE = "01110"
BLOCKED_FOURS = ("01111", "11110", "11011", "10111", "11101")
BLOCKED_THREES = ("11100", "00111", "11010", "01011", "10110", "01101")
OPEN_TWOS = ("01100", "00110", "011010", "010110")
BLOCKED_TWOS = ("11000", "00011", "10100", "00101", "10010")


@dataclass
class PatternCounts:
    """Occurrences of each shape for one evaluation."""
    five: int = 0
    open_four: int = 0
    double_four: int = 0
    blocked_four: int = 0
    double_three: int = 0
    open_three: int = 0
    blocked_three: int = 0
    open_two: int = 0
    blocked_two: int = 0

    def __add__(self, other: "PatternCounts") -> "PatternCounts":
        return PatternCounts(**{
            f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)
        })

    def __iadd__(self, other: "PatternCounts") -> "PatternCounts":
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self

    def score(self, weights) -> int:
        """Weighted sum; `weights` has one attribute per shape (ShapeWeights)."""
        return sum(getattr(self, f.name) * getattr(weights, f.name) for f in fields(self))

    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))


def extract_window(board: Board, row: int, col: int, axis: Tuple[int, int], player: Player) -> str:
    """Encode the 9 cells centered on (row, col) along `axis` = (d_row, d_col)."""
    dr, dc = axis
    grid = board.grid
    size = board.size
    own = player.value
    chars = []
    for k in range(-WINDOW_RADIUS, WINDOW_RADIUS + 1):
        r, c = row + k * dr, col + k * dc
        if 0 <= r < size and 0 <= c < size:
            v = grid[r, c]
            if v == own:
                chars.append(OWN)
            elif v == 0:
                chars.append(EMPTY)
            else:
                chars.append(BLOCKED)
        else:
            chars.append(BLOCKED)
    return "".join(chars)


def count_occurrences(window: str, shape: str) -> int:
    """Overlapping occurrences of `shape` in `window`."""
    count = 0
    pos = window.find(shape)
    while pos != -1:
        count += 1
        pos = window.find(shape, pos + 1)
    return count


def completion_cells(window: str) -> int:
    """Number of empty cells that would turn the window into a five."""
    cells = 0
    for i, ch in enumerate(window):
        if ch == EMPTY and FIVE in window[:i] + OWN + window[i + 1:]:
            cells += 1
    return cells


def classify(window: str) -> PatternCounts:
    """
    Shapes present in one window.

    Tiers (four, three, two) are checked independently. Inside a tier the open
    shape wins over the blocked one, and a five suppresses the four tier.
    """
    counts = PatternCounts()

    if FIVE in window:
        counts.five = 1
    elif OPEN_FOUR in window:
        counts.open_four = 1
    else:
        if any(shape in window for shape in BLOCKED_FOURS):
            counts.blocked_four = 1
            # two ways to complete on the same line, e.g. 1011101
            if completion_cells(window) >= 2:
                counts.double_four = 1

    threes = count_occurrences(window, OPEN_THREE)
    if threes:
        counts.open_three = 1
        if threes >= 2:
            counts.double_three = 1
    elif any(shape in window for shape in BLOCKED_THREES):
        counts.blocked_three = 1

    if any(shape in window for shape in OPEN_TWOS):
        counts.open_two = 1
    elif any(shape in window for shape in BLOCKED_TWOS):
        counts.blocked_two = 1

    return counts


def count_patterns(board: Board, row: int, col: int, player: Player) -> PatternCounts:
    """Sum of classify() over the four axes through (row, col)."""
    counts = PatternCounts()
    for axis in board.directions():
        counts += classify(extract_window(board, row, col, axis, player))
    return counts
