"""
Row visibility and "+N more" counts.

is_within_height() is the one rule deciding whether a stacked row is
visible; filtering and overflow counting both go through it.
"""

from typing import Callable, Iterable, Sequence

from .event_model import DateLike, EventViewModel, date_key


def is_within_height(container_height: float, row_height: float) -> Callable[[EventViewModel], bool]:
    """
    Build a predicate telling whether a view model's row fits in the
    container. Row `top` occupies (top + 1) * row_height pixels.
    """
    def within_height(view_model: EventViewModel) -> bool:
        return (view_model.top + 1) * row_height <= container_height

    return within_height


def filter_visible(view_models: Iterable[EventViewModel], container_height: float,
                   row_height: float) -> list[EventViewModel]:
    within_height = is_within_height(container_height, row_height)
    return [vm for vm in view_models if within_height(vm)]


def get_exceed_count(view_models: Iterable[EventViewModel], container_height: float,
                     row_height: float, target_date: DateLike) -> int:
    """Number of view models on `target_date` whose row does not fit."""
    within_height = is_within_height(container_height, row_height)
    return sum(
        1 for vm in view_models
        if vm.occupies(target_date) and not within_height(vm)
    )


def get_exceed_counts(view_models: Sequence[EventViewModel], cells: Iterable[DateLike],
                      container_height: float, row_height: float) -> dict[str, int]:
    """
    Exceed count for every cell, keyed by date key. Cells where everything
    fits are left out.
    """
    counts = {}
    for cell in cells:
        count = get_exceed_count(view_models, container_height, row_height, cell)
        if count:
            counts[date_key(cell)] = count
    return counts
