"""Straight-line selections on the word-search grid."""

from typing import Iterable, List, Optional, Sequence

from .models import CellPosition, FoundWord


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_straight_line(start: CellPosition, end: CellPosition) -> bool:
    """True if `end` lies on one of the 8 compass directions from `start`."""
    row_delta = abs(end.row - start.row)
    col_delta = abs(end.col - start.col)
    return row_delta == 0 or col_delta == 0 or row_delta == col_delta


def expand_path(start: CellPosition, end: CellPosition) -> List[CellPosition]:
    """
    Expand two endpoints into the inclusive list of cells between them.

    Walks max(|Δrow|, |Δcol|) unit steps from `start`, so the result always
    has that many cells plus one. Callers check `is_straight_line` first;
    for other pairs the walk still terminates but does not reach `end`.
    """
    row_delta = end.row - start.row
    col_delta = end.col - start.col
    steps = max(abs(row_delta), abs(col_delta))
    row_step, col_step = _sign(row_delta), _sign(col_delta)

    return [
        CellPosition(start.row + i * row_step, start.col + i * col_step)
        for i in range(steps + 1)
    ]


def in_bounds(grid: Sequence[Sequence[str]], cell: CellPosition) -> bool:
    return 0 <= cell.row < len(grid) and 0 <= cell.col < len(grid[cell.row])


def word_along(grid: Sequence[Sequence[str]], path: Iterable[CellPosition]) -> str:
    """Concatenate the grid letters along a path."""
    return "".join(grid[cell.row][cell.col] for cell in path)


def match_word(candidate: str, words: Iterable[Optional[str]], case_sensitive: bool = False) -> Optional[str]:
    """
    Find the listed word spelled by `candidate` in either direction.

    Returns the word as listed (not as read off the grid), or None.
    """
    reversed_candidate = candidate[::-1]
    if not case_sensitive:
        candidate = candidate.lower()
        reversed_candidate = reversed_candidate.lower()

    for word in words:
        if not word:
            continue
        target = word if case_sensitive else word.lower()
        if target == candidate or target == reversed_candidate:
            return word
    return None


def path_contains(start: CellPosition, end: CellPosition, cell: CellPosition) -> bool:
    """Whether `cell` lies on the path between two stored endpoints."""
    return cell in expand_path(start, end)


def is_cell_found(found_words: Iterable[FoundWord], cell: CellPosition) -> bool:
    """Whether `cell` belongs to any found word (paths are rebuilt from endpoints)."""
    return any(path_contains(fw.start, fw.end, cell) for fw in found_words)
