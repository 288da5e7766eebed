"""
Kubux Grid Layout Module

This module computes the layout of events on a week/month calendar grid:
- Column geometry with optional narrow weekends (geometry.py)
- Row stacking of multi-day events (row_stacker.py)
- Row visibility and "+N more" counts (overflow.py)
- Positioned view models per cell (view_builder.py)
- Events, view models and the iCalendar adapter (event_model.py)
- Date-indexed event store (event_store.py)
- Configuration parsing (config.py)
"""

from .config import Config, LayoutConfig
from .event_model import Event, EventViewModel, date_key, events_from_icalendar
from .event_store import DataStore
from .geometry import (
    TOTAL_WIDTH, GridGeometry,
    get_grid_width_and_left_percent_values, get_width, make_weekend_weight
)
from .overflow import is_within_height, get_exceed_count, get_exceed_counts, filter_visible
from .row_stacker import assign_rows
from .view_builder import ClipMode, GridLayout, get_rendered_event_view_models

__all__ = [
    'Config',
    'LayoutConfig',
    'Event',
    'EventViewModel',
    'date_key',
    'events_from_icalendar',
    'DataStore',
    'TOTAL_WIDTH',
    'GridGeometry',
    'get_grid_width_and_left_percent_values',
    'get_width',
    'make_weekend_weight',
    'is_within_height',
    'get_exceed_count',
    'get_exceed_counts',
    'filter_visible',
    'assign_rows',
    'ClipMode',
    'GridLayout',
    'get_rendered_event_view_models',
]
