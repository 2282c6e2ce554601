# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from clientdesk import configuration
from clientdesk.configuration import Configuration

logger = logging.getLogger(__name__)


class ConfigurationRepository:
    """The user's config.yaml, with defaults for settings the file lacks."""

    def __init__(self) -> None:
        self._config: Optional[Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> Configuration:
        if self._config is None:
            self._config = self.__load_data()
        return self._config

    def __load_data(self) -> Configuration:
        stored: Optional[dict[str, Any]] = load(
            configuration.APP_CONFIG_PATH.read_text(), Loader=Loader
        )
        if stored is None:
            raise ValueError(f"empty configuration file: {configuration.APP_CONFIG_PATH}")

        missing_settings = {
            key: value
            for key, value in configuration.get_default_configuration().items()
            if key not in stored
        }
        if missing_settings:
            logger.info("adding default settings: %s", ", ".join(missing_settings))
            self.is_dirty = True
        return cast(Configuration, {**missing_settings, **stored})

    def flush(self) -> bool:
        if self._config is None or not self.is_dirty:
            return False
        configuration.APP_CONFIG_PATH.write_text(dump(self._config, Dumper=Dumper))
        self.is_dirty = False
        return True

    def reset(self) -> None:
        self._config = None
        self.is_dirty = False

    def get_config(self) -> Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        clear_ids_on_view: Optional[bool] = None,
        highlight_seconds: Optional[float] = None,
        max_import_rows: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        """Change the given settings; arguments left as None are untouched."""
        changes: dict[str, Any] = {
            "data_path": data_path,
            "show_header": show_header,
            "clear_ids_on_view": clear_ids_on_view,
            "highlight_seconds": highlight_seconds,
            "max_import_rows": max_import_rows,
            "log_level": log_level.upper() if log_level is not None else None,
        }
        config = cast(dict[str, Any], self.config)
        for key, value in changes.items():
            if value is not None:
                config[key] = value
        if remove_data_path:
            config["data_path"] = None

        self.is_dirty = True


CONFIGURATION_REPO = ConfigurationRepository()
