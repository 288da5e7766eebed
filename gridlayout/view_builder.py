"""
Builds positioned event view models for one grid row.

Collects the events touching the cells from the store's date index,
stacks them into rows and applies column geometry. A malformed or stale
event is skipped here instead of failing the whole grid.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Sequence

from .debug import debug_print
from .event_model import DateLike, Event, EventViewModel, date_key, occupied_date_range, to_date
from .event_store import DataStore
from .geometry import (
    TOTAL_WIDTH, WeightFunction,
    get_grid_width_and_left_percent_values, get_width, get_unit_width, resolve_weight
)
from .row_stacker import assign_rows, day_span


def _debug_print(msg: str) -> None:
    debug_print("GRID", msg)


class ClipMode(Enum):
    """How events running past the first/last cell are sized."""
    CLIP = "clip"          # cut at the grid boundary
    OVERHANG = "overhang"  # extend past the boundary (negative left, wider than the grid)


@dataclass
class GridLayout:
    """Result of a layout pass."""
    view_models: list[EventViewModel] = field(default_factory=list)
    grid_date_event_model_map: dict[str, list[EventViewModel]] = field(default_factory=dict)


@dataclass
class _Placement:
    event: Event
    first: date
    last: date
    start_index: int
    end_index: int


def get_rendered_event_view_models(
    cells: Sequence[DateLike],
    data_store: DataStore,
    narrow_weekend: bool,
    *,
    total_width: float = TOTAL_WIDTH,
    clip_mode: ClipMode = ClipMode.CLIP,
    weight: Optional[WeightFunction] = None,
) -> GridLayout:
    """
    Lay out every event touching `cells`.

    Args:
        cells: Ascending grid dates, one per column.
        data_store: Store providing ids_of_day and get_event().
        narrow_weekend: Whether weekend columns are narrowed.
        total_width: Width the columns add up to.
        clip_mode: Sizing of events extending outside the grid.
        weight: Optional column weight function for narrow_weekend.

    Returns:
        GridLayout with the flat view model list and the per-cell map
        (date key -> view models ordered by row).
    """
    days = [to_date(cell) for cell in cells]
    if not days:
        return GridLayout()

    placements = _collect_placements(days, data_store)
    if not placements:
        return GridLayout()

    rows = assign_rows([p.event for p in placements], span=day_span)
    width_list, left_list = get_grid_width_and_left_percent_values(
        days, narrow_weekend, total_width, weight
    )

    view_models = []
    for placement in placements:
        view_model = EventViewModel.create(placement.event)
        view_model.top = rows[placement.event.id]
        view_model.start_index = placement.start_index
        view_model.end_index = placement.end_index
        view_model.exceed_left = placement.first < days[0]
        view_model.exceed_right = placement.last > days[-1]
        view_model.left = left_list[placement.start_index]
        view_model.width = get_width(width_list, placement.start_index, placement.end_index)
        view_models.append(view_model)

    if clip_mode is ClipMode.OVERHANG:
        _apply_overhang(view_models, placements, days, narrow_weekend, total_width, weight)

    grid_map: dict[str, list[EventViewModel]] = {}
    for day in days:
        in_cell = [vm for vm in view_models if vm.occupies(day)]
        if in_cell:
            in_cell.sort(key=lambda vm: vm.top)
            grid_map[date_key(day)] = in_cell

    _debug_print(f"Laid out {len(view_models)} events over {len(days)} cells")
    return GridLayout(view_models, grid_map)


def _collect_placements(days: list[date], data_store: DataStore) -> list[_Placement]:
    """Distinct, valid events touching the cells, in cell order."""
    placements = []
    seen: set[str] = set()

    for day in days:
        for event_id in sorted(data_store.get_ids_of_day(date_key(day))):
            if event_id in seen:
                continue
            seen.add(event_id)

            event = data_store.get_event(event_id)
            if event is None:
                _debug_print(f"Index refers to unknown event {event_id}, skipped")
                continue

            date_range = occupied_date_range(event)
            if date_range is None:
                _debug_print(f"Event {event_id} ends before it starts, skipped")
                continue

            first, last = date_range
            start_index = bisect_left(days, first)
            end_index = bisect_right(days, last) - 1
            if start_index > end_index:
                _debug_print(f"Event {event_id} does not occupy any cell, skipped")
                continue

            placements.append(_Placement(event, first, last, start_index, end_index))

    return placements


def _apply_overhang(view_models: list[EventViewModel], placements: list[_Placement],
                    days: list[date], narrow_weekend: bool, total_width: float,
                    weight: Optional[WeightFunction]):
    """Extend clipped geometry by the width of the hidden days."""
    weight = resolve_weight(narrow_weekend, weight)
    unit_width = get_unit_width(days, narrow_weekend, total_width, weight)

    def hidden_width(first: date, last: date) -> float:
        width = 0
        day = first
        while day <= last:
            width += unit_width * weight(day)
            day += timedelta(days=1)
        return width

    one_day = timedelta(days=1)
    for view_model, placement in zip(view_models, placements):
        if view_model.exceed_left:
            before = hidden_width(placement.first, days[0] - one_day)
            view_model.left -= before
            view_model.width += before
        if view_model.exceed_right:
            view_model.width += hidden_width(days[-1] + one_day, placement.last)
