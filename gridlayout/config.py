"""
Configuration parser for Kubux Grid.

Handles TOML file parsing for the grid layout settings.
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .debug import debug_print
from .geometry import TOTAL_WIDTH, WeightFunction, make_weekend_weight
from .view_builder import ClipMode


def _debug_print(msg: str) -> None:
    debug_print("CONFIG", msg)


@dataclass
class LayoutConfig:
    """Configuration for grid geometry and row stacking."""
    total_width: float = TOTAL_WIDTH
    narrow_weekend: bool = False
    weekend_weight: float = 0.5       # Width of a weekend column relative to a weekday
    weekend_days: list[int] = None    # weekday() numbers, 0=Monday
    row_height: int = 22              # Height of one stacked event row in pixels
    container_height: int = 110       # Visible height of a cell in pixels
    clip_mode: ClipMode = ClipMode.CLIP

    def __post_init__(self):
        if self.weekend_days is None:
            self.weekend_days = [5, 6]
        if isinstance(self.clip_mode, str):
            try:
                self.clip_mode = ClipMode(self.clip_mode)
            except ValueError:
                raise ValueError(
                    f"Layout.clip_mode must be one of "
                    f"{[m.value for m in ClipMode]}, got {self.clip_mode!r}"
                )
        self.validate()

    def validate(self):
        """Raise ValueError for values the layout engine cannot use."""
        for key in ('total_width', 'weekend_weight', 'row_height', 'container_height'):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Layout.{key} must be a number, got {value!r}")
        if not isinstance(self.narrow_weekend, bool):
            raise ValueError(f"Layout.narrow_weekend must be true or false, got {self.narrow_weekend!r}")
        if not isinstance(self.weekend_days, list):
            raise ValueError(f"Layout.weekend_days must be a list, got {self.weekend_days!r}")

        if self.total_width <= 0:
            raise ValueError(f"Layout.total_width must be positive, got {self.total_width}")
        if self.weekend_weight <= 0:
            raise ValueError(f"Layout.weekend_weight must be positive, got {self.weekend_weight}")
        if self.row_height <= 0:
            raise ValueError(f"Layout.row_height must be positive, got {self.row_height}")
        if self.container_height < 0:
            raise ValueError(f"Layout.container_height must not be negative, got {self.container_height}")
        for day in self.weekend_days:
            if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
                raise ValueError(f"Layout.weekend_days entries must be 0-6, got {day}")

    def weight_function(self) -> WeightFunction:
        """Column weight function for narrow_weekend mode."""
        return make_weekend_weight(self.weekend_weight, self.weekend_days)


@dataclass
class Config:
    """Main configuration container for Kubux Grid."""

    timezone: str = "UTC"
    first_weekday: int = 0  # 0=Monday, 6=Sunday
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'kubux-grid' / 'kubux-grid.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        _debug_print(f"TOML data keys: {list(data.keys())}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        # Parse General section
        general = data.get('General', {})
        timezone = general.get('timezone', cls.timezone)
        first_weekday = general.get('first_weekday', cls.first_weekday)
        if not isinstance(first_weekday, int) or not 0 <= first_weekday <= 6:
            raise ValueError(f"General.first_weekday must be 0-6, got {first_weekday!r}")

        # Parse Layout section
        layout_data = data.get('Layout', {})
        layout = LayoutConfig(
            total_width=layout_data.get('total_width', LayoutConfig.total_width),
            narrow_weekend=layout_data.get('narrow_weekend', LayoutConfig.narrow_weekend),
            weekend_weight=layout_data.get('weekend_weight', LayoutConfig.weekend_weight),
            weekend_days=layout_data.get('weekend_days'),
            row_height=layout_data.get('row_height', LayoutConfig.row_height),
            container_height=layout_data.get('container_height', LayoutConfig.container_height),
            clip_mode=layout_data.get('clip_mode', LayoutConfig.clip_mode.value),
        )
        _debug_print(f"Layout: {layout}")

        return cls(
            timezone=timezone,
            first_weekday=first_weekday,
            layout=layout,
        )
