"""Terminal UI components for the upload form."""

from .theme import console, err_console, render_header, render_divider
from .output import (
    format_size,
    render_actions,
    render_alert,
    render_error,
    render_outcomes,
    render_selection,
)

__all__ = [
    "console",
    "err_console",
    "render_header",
    "render_divider",
    "format_size",
    "render_actions",
    "render_alert",
    "render_error",
    "render_outcomes",
    "render_selection",
]
