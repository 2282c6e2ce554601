# SPDX-License-Identifier: MIT

# Color constant for closed tasks
COMPLETED_TASK_COLOR = "bright_black"

HIGHLIGHT_COLOR = "reverse"

# Display colors from the task helpers mapped onto the Rich palette
DISPLAY_COLORS: dict[str, str] = {
    "error": "red",
    "warning": "dark_orange",
    "success": "green",
    "primary": "bright_blue",
    "default": "white",
}

OVERDUE_COLOR = "bold red"
DUE_TODAY_COLOR = "bold dark_orange"

COLUMN_COLORS: dict[str, str] = {
    "todo": "gold1",
    "in_progress": "bright_blue",
    "closed": "green",
}


def rich_color(display_color: str) -> str:
    return DISPLAY_COLORS.get(display_color, DISPLAY_COLORS["default"])
