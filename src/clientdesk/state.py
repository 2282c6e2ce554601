# SPDX-License-Identifier: MIT

"""Per-invocation switches, set from the config file and the global options."""

from contextvars import ContextVar

_clear_ids: ContextVar[bool] = ContextVar("clear_ids", default=True)
_show_header: ContextVar[bool] = ContextVar("show_header", default=True)


def set_clear_ids(value: bool) -> None:
    _clear_ids.set(value)


def get_clear_ids() -> bool:
    """Whether list commands start from a fresh short-id map."""
    return _clear_ids.get()


def set_show_header(value: bool) -> None:
    _show_header.set(value)


def get_show_header() -> bool:
    return _show_header.get()
