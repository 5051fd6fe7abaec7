"""Rendering for the upload form: selection preview, alerts, and results."""

from typing import Iterable, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .theme import DEFAULT_PALETTE, console


def format_size(size: int) -> str:
    """Human-readable byte count."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def render_selection(state) -> None:
    """Preview the selected filenames, or a hint while nothing is selected."""
    palette = DEFAULT_PALETTE
    if state.is_unset:
        console.print(Text("  No file selected. Select a PDF to begin.", style=f"dim {palette.text_dim}"))
        return

    table = Table(show_header=True, header_style=f"dim {palette.text_muted}", box=None, padding=(0, 2))
    table.add_column("#", justify="right", style=f"dim {palette.text_dim}")
    table.add_column("FILE", style=palette.file)
    table.add_column("SIZE", justify="right", style=palette.text)
    for index, selected in enumerate(state.files, 1):
        table.add_row(str(index), selected.name, format_size(selected.size))
    console.print(table)


def render_actions(can_cancel: bool, can_submit: bool) -> None:
    """Show the form actions with their enabled/disabled state."""
    palette = DEFAULT_PALETTE
    line = Text("  ")
    for label, enabled in (("cancel", can_cancel), ("upload", can_submit)):
        style = f"bold {palette.accent}" if enabled else f"dim {palette.disabled}"
        line.append(f"[{label}]", style=style)
        line.append(" ")
    console.print(line)


def render_alert(message: str) -> None:
    """Render a blocking notice."""
    palette = DEFAULT_PALETTE
    console.print(Panel(
        Text(message, style=palette.text_bright),
        title="notice",
        title_align="left",
        border_style=palette.error,
        padding=(0, 2),
        expand=False,
    ))


def render_error(text: str) -> None:
    """Render an inline error line."""
    palette = DEFAULT_PALETTE
    err = Text()
    err.append("err ", style=f"bold {palette.error}")
    err.append("| ", style=f"dim {palette.text_muted}")
    err.append(text, style=palette.error)
    console.print(err)


def render_outcomes(outcomes: Iterable, verbose: bool = False) -> None:
    """Report a submit.

    Failures always get a line. Successes and the summary count are only
    shown when ``verbose`` is set; otherwise the URLs go to the log alone.
    """
    palette = DEFAULT_PALETTE
    outcomes = list(outcomes)
    if not outcomes:
        return

    for outcome in outcomes:
        if outcome.ok and not verbose:
            continue
        line = Text("  ")
        if outcome.ok:
            line.append("ok  ", style=f"bold {palette.success}")
            line.append(outcome.file.name, style=palette.file)
            urls: List[str] = outcome.urls
            if urls:
                line.append("  " + ", ".join(urls), style=f"dim {palette.text}")
        else:
            line.append("err ", style=f"bold {palette.error}")
            line.append(outcome.file.name, style=palette.file)
            line.append(f"  {outcome.error}", style=f"dim {palette.error}")
        console.print(line)

    if not verbose:
        return
    failed = sum(1 for o in outcomes if not o.ok)
    summary = f"  {len(outcomes) - failed}/{len(outcomes)} uploaded"
    console.print(Text(summary, style=f"dim {palette.text_dim}"))
