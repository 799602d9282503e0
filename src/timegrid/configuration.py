# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "timegrid"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_EVENTS_PATH: Path = DATA_PATH / "events.yaml"


class Configuration(TypedDict):
    day_start_minutes: int
    hour_height_px: float
    utc_offset_hours: float
    day_count: int
    use_24_hour: bool
    max_visible_all_day_rows: int
    auto_scroll_threshold_px: float
    auto_scroll_speed_px: float
    data_path: Optional[str]


DEFAULT_CONFIGURATION: Configuration = {
    "day_start_minutes": 300,
    "hour_height_px": 64.0,
    "utc_offset_hours": 0.0,
    "day_count": 7,
    "use_24_hour": True,
    "max_visible_all_day_rows": 3,
    "auto_scroll_threshold_px": 40.0,
    "auto_scroll_speed_px": 10.0,
    "data_path": None,
}

MIN_DAY_COUNT = 1
MAX_DAY_COUNT = 14


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_EVENTS_PATH

    DATA_PATH = data_path
    DATA_EVENTS_PATH = DATA_PATH / "events.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are read.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
