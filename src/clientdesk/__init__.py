# SPDX-License-Identifier: MIT

"""clientdesk: clients and their tasks in the terminal."""

from clientdesk.cleanup import register_cleanup
from clientdesk.initialize import initialize
from clientdesk.terminal.app import run

__version__ = "0.1.0"


def main() -> None:
    """Entry point of the clientdesk command."""
    initialize()
    register_cleanup()
    run()
