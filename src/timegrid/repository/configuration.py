# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from timegrid import configuration
from timegrid.model.zoom import MAX_HOUR_HEIGHT_PX, MIN_HOUR_HEIGHT_PX
from timegrid.time import MINUTES_PER_DAY, clamp_utc_offset


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError()

        # Back-fill settings added after the file was written
        for key, value in configuration.DEFAULT_CONFIGURATION.items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        """Drop the cached configuration so the next access reads the file."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        day_start_minutes: Optional[int] = None,
        hour_height_px: Optional[float] = None,
        utc_offset_hours: Optional[float] = None,
        day_count: Optional[int] = None,
        use_24_hour: Optional[bool] = None,
        max_visible_all_day_rows: Optional[int] = None,
        auto_scroll_threshold_px: Optional[float] = None,
        auto_scroll_speed_px: Optional[float] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if day_start_minutes is not None:
            self.config["day_start_minutes"] = max(
                0, min(MINUTES_PER_DAY - 1, day_start_minutes)
            )
        if hour_height_px is not None:
            self.config["hour_height_px"] = max(
                MIN_HOUR_HEIGHT_PX, min(MAX_HOUR_HEIGHT_PX, hour_height_px)
            )
        if utc_offset_hours is not None:
            self.config["utc_offset_hours"] = clamp_utc_offset(utc_offset_hours)
        if day_count is not None:
            self.config["day_count"] = max(
                configuration.MIN_DAY_COUNT,
                min(configuration.MAX_DAY_COUNT, day_count),
            )
        if use_24_hour is not None:
            self.config["use_24_hour"] = use_24_hour
        if max_visible_all_day_rows is not None:
            self.config["max_visible_all_day_rows"] = max(1, max_visible_all_day_rows)
        if auto_scroll_threshold_px is not None:
            self.config["auto_scroll_threshold_px"] = auto_scroll_threshold_px
        if auto_scroll_speed_px is not None:
            self.config["auto_scroll_speed_px"] = auto_scroll_speed_px
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
