"""
Horizontal geometry of the grid columns.

Widths and left offsets are percentages of `total_width`. They depend only
on the cells and the weighting, never on the events laid out on top.
"""

from datetime import date
from typing import Callable, NamedTuple, Optional, Sequence

from .event_model import DateLike, to_date


TOTAL_WIDTH = 100

WeightFunction = Callable[[date], float]


class GridGeometry(NamedTuple):
    width_list: list[float]
    left_list: list[float]


def make_weekend_weight(weekend_weight: float = 0.5,
                        weekend_days: Sequence[int] = (5, 6)) -> WeightFunction:
    """
    Build a weight function giving weekend days `weekend_weight` and
    every other day 1. Days use date.weekday() numbering (0=Monday).
    """
    weekend = frozenset(weekend_days)

    def weight(day: date) -> float:
        return weekend_weight if day.weekday() in weekend else 1

    return weight


narrow_weekend_weight = make_weekend_weight()


def uniform_weight(day: date) -> float:
    return 1


def get_unit_width(cells: Sequence[DateLike], narrow_weekend: bool,
                   total_width: float = TOTAL_WIDTH,
                   weight: Optional[WeightFunction] = None) -> float:
    """Width of a column with weight 1."""
    weight = resolve_weight(narrow_weekend, weight)
    total_weight = sum(weight(to_date(cell)) for cell in cells)
    if total_weight <= 0:
        raise ValueError(f"Column weights must sum to a positive value, got {total_weight}")
    return total_width / total_weight


def get_grid_width_and_left_percent_values(
    cells: Sequence[DateLike],
    narrow_weekend: bool,
    total_width: float = TOTAL_WIDTH,
    weight: Optional[WeightFunction] = None,
) -> GridGeometry:
    """
    Compute per-column width and left percentages.

    Without narrow_weekend every column gets an equal share. With it, each
    column is weighted by `weight` (weekend days count half by default) and
    the total width is split proportionally.

    Args:
        cells: Ascending grid dates, one per column.
        narrow_weekend: Whether to apply the weight function.
        total_width: Width the columns add up to.
        weight: Optional weight function; defaults to 1 for weekdays and
            0.5 for Saturday/Sunday.

    Returns:
        GridGeometry(width_list, left_list), in the order of `cells`.
    """
    if not cells:
        return GridGeometry([], [])

    if narrow_weekend:
        resolved = resolve_weight(narrow_weekend, weight)
        unit_width = get_unit_width(cells, narrow_weekend, total_width, resolved)
        width_list = [unit_width * resolved(to_date(cell)) for cell in cells]
    else:
        width_list = [total_width / len(cells)] * len(cells)

    left_list = []
    accumulated_width = 0
    for width in width_list:
        left_list.append(accumulated_width)
        accumulated_width += width

    return GridGeometry(width_list, left_list)


def get_width(width_list: Sequence[float], start: int, end: int) -> float:
    """
    Sum of width_list[start..end], both inclusive.

    Raises:
        IndexError: unless 0 <= start <= end < len(width_list).
    """
    if not 0 <= start <= end < len(width_list):
        raise IndexError(
            f"Invalid column span {start}..{end} for {len(width_list)} columns"
        )
    return sum(width_list[start:end + 1])


def resolve_weight(narrow_weekend: bool, weight: Optional[WeightFunction]) -> WeightFunction:
    if not narrow_weekend:
        return uniform_weight
    return weight or narrow_weekend_weight
