# SPDX-License-Identifier: MIT

import atexit
import logging

from clientdesk.repository.client import CLIENT_REPO
from clientdesk.repository.configuration import CONFIGURATION_REPO
from clientdesk.repository.id_map import ID_MAP_REPO
from clientdesk.repository.task import TASK_REPO

logger = logging.getLogger(__name__)


def flush_and_sync() -> None:
    """Write every repository with unsaved changes back to disk."""
    for name, repository in (
        ("configuration", CONFIGURATION_REPO),
        ("id map", ID_MAP_REPO),
        ("clients", CLIENT_REPO),
        ("tasks", TASK_REPO),
    ):
        if repository.flush():
            logger.debug("flushed %s", name)


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
