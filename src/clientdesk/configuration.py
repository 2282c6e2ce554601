# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "clientdesk"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TASKS_DIR: Path = DATA_PATH / "tasks"
DATA_CLIENTS_DIR: Path = DATA_PATH / "clients"
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"

DEFAULT_HIGHLIGHT_SECONDS = 0.6
DEFAULT_MAX_IMPORT_ROWS = 500
DEFAULT_LOG_LEVEL = "WARNING"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    clear_ids_on_view: bool
    highlight_seconds: NotRequired[float]
    max_import_rows: NotRequired[int]
    log_level: NotRequired[str]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "clear_ids_on_view": True,
        "highlight_seconds": DEFAULT_HIGHLIGHT_SECONDS,
        "max_import_rows": DEFAULT_MAX_IMPORT_ROWS,
        "log_level": DEFAULT_LOG_LEVEL,
    }


def set_data_path(data_path: Path) -> None:
    """Point every data file path at a new data directory."""
    global DATA_PATH, DATA_TASKS_DIR, DATA_CLIENTS_DIR, DATA_ID_MAP_PATH

    DATA_PATH = data_path
    DATA_TASKS_DIR = DATA_PATH / "tasks"
    DATA_CLIENTS_DIR = DATA_PATH / "clients"
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
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
