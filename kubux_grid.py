#!/usr/bin/env python3
"""
Kubux Grid - lays out the events of an ICS file on a week or month grid.

This is the command line entry point. It prints the computed geometry,
row assignment and "+N more" counts as JSON.
"""

import sys
import json
import argparse
from datetime import date
from pathlib import Path

from gridlayout.cells import week_cells, month_weeks
from gridlayout.config import Config
from gridlayout.debug import set_debug, debug_print
from gridlayout.event_model import events_from_icalendar, date_key
from gridlayout.event_store import DataStore
from gridlayout.geometry import get_grid_width_and_left_percent_values
from gridlayout.overflow import is_within_height, get_exceed_counts
from gridlayout.timezone_utils import set_timezone
from gridlayout.view_builder import ClipMode, get_rendered_event_view_models


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Kubux Grid - week/month calendar grid layout for ICS files"
    )
    parser.add_argument(
        "ics_file",
        type=Path,
        help="iCalendar file with the events to lay out"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Date inside the week/month to show, YYYY-MM-DD (default: today)"
    )
    parser.add_argument(
        "--view",
        choices=["week", "month"],
        default="week",
        help="Grid to lay out (default: week)"
    )
    parser.add_argument(
        "--narrow-weekend",
        action="store_true",
        help="Render weekend columns at reduced width"
    )
    parser.add_argument(
        "--clip-mode",
        choices=[m.value for m in ClipMode],
        help="Sizing of events running past the grid"
    )
    parser.add_argument(
        "--container-height",
        type=int,
        help="Visible cell height in pixels"
    )
    parser.add_argument(
        "--row-height",
        type=int,
        help="Height of one event row in pixels"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_config(args) -> Config:
    """Load the configuration file and apply command line overrides."""
    if args.config is not None:
        config = Config.load(args.config)
    elif Config.get_default_config_path().exists():
        config = Config.load()
    else:
        config = Config()

    layout = config.layout
    if args.narrow_weekend:
        layout.narrow_weekend = True
    if args.clip_mode:
        layout.clip_mode = ClipMode(args.clip_mode)
    if args.container_height is not None:
        layout.container_height = args.container_height
    if args.row_height is not None:
        layout.row_height = args.row_height
    layout.validate()
    return config


def layout_row(cells: list[date], store: DataStore, config: Config) -> dict:
    """Lay out one grid row and describe it as a JSON-ready dict."""
    layout = config.layout
    weight = layout.weight_function()

    width_list, left_list = get_grid_width_and_left_percent_values(
        cells, layout.narrow_weekend, layout.total_width, weight
    )
    grid = get_rendered_event_view_models(
        cells, store, layout.narrow_weekend,
        total_width=layout.total_width,
        clip_mode=layout.clip_mode,
        weight=weight,
    )
    within_height = is_within_height(layout.container_height, layout.row_height)

    events = []
    for view_model in grid.view_models:
        entry = view_model.to_dict()
        entry["visible"] = within_height(view_model)
        events.append(entry)

    return {
        "cells": [cell.isoformat() for cell in cells],
        "width_list": width_list,
        "left_list": left_list,
        "events": events,
        "cell_events": {
            key: [vm.id for vm in view_models]
            for key, view_models in grid.grid_date_event_model_map.items()
        },
        "exceed_counts": get_exceed_counts(
            grid.view_models, cells, layout.container_height, layout.row_height
        ),
    }


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    set_debug(args.debug)

    # Load configuration
    try:
        config = load_config(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"\nDefault configuration location: {Config.get_default_config_path()}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, OSError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    set_timezone(config.timezone)

    try:
        ical_text = args.ics_file.read_bytes()
        events = events_from_icalendar(ical_text, calendar_id=args.ics_file.stem)
    except (ValueError, OSError) as e:
        print(f"Error reading {args.ics_file}: {e}", file=sys.stderr)
        sys.exit(1)

    store = DataStore.from_events(events)
    debug_print("CLI", f"Loaded {store.get_event_count()} events from {args.ics_file}")

    target = args.date or date.today()
    if args.view == "week":
        rows = [week_cells(target, config.first_weekday)]
    else:
        rows = month_weeks(target.year, target.month, config.first_weekday)

    result = {
        "view": args.view,
        "date": date_key(target),
        "timezone": config.timezone,
        "narrow_weekend": config.layout.narrow_weekend,
        "rows": [layout_row(cells, store, config) for cells in rows],
    }
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
