# SPDX-License-Identifier: MIT

import logging

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from clientdesk import configuration, state
from clientdesk.logger import configure_logging
from clientdesk.repository.configuration import CONFIGURATION_REPO
from clientdesk.template.id_map import get_id_map_template

logger = logging.getLogger(__name__)


def initialize() -> None:
    """
    Prepare a run: config file, data directory and per-run switches.

    The config file is read first because it may move the data directory.
    """
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(
            dump(configuration.get_default_configuration(), Dumper=Dumper)
        )

    configuration.load_data_path_configuration()
    __prepare_data_directory()
    __apply_configuration()


def __prepare_data_directory() -> None:
    configuration.DATA_TASKS_DIR.mkdir(parents=True, exist_ok=True)
    configuration.DATA_CLIENTS_DIR.mkdir(parents=True, exist_ok=True)
    if not configuration.DATA_ID_MAP_PATH.is_file():
        configuration.DATA_ID_MAP_PATH.write_text(
            dump(get_id_map_template(), Dumper=Dumper)
        )


def __apply_configuration() -> None:
    config = CONFIGURATION_REPO.get_config()
    state.set_show_header(config["show_header"])
    state.set_clear_ids(config["clear_ids_on_view"])
    configure_logging(config.get("log_level", configuration.DEFAULT_LOG_LEVEL))
    logger.debug("data directory: %s", configuration.DATA_PATH)
