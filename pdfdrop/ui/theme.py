"""pdfdrop theme: palette, shared consoles, and header helpers."""

from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.text import Text


@dataclass(frozen=True)
class ColorPalette:
    """Core UI color palette."""

    text_bright: str = "#e8e8f0"
    text: str = "#b8b8cc"
    text_dim: str = "#4a4a60"
    text_muted: str = "#363648"
    accent: str = "#00d4e5"
    border: str = "#b44dff"
    file: str = "#e5c747"
    success: str = "#34d399"
    error: str = "#e55a6e"
    disabled: str = "#4a4a60"


DEFAULT_PALETTE = ColorPalette()

console = Console()
err_console = Console(stderr=True)


def render_header(title: str, subtitle: str = "") -> None:
    """Render a header panel."""
    palette = DEFAULT_PALETTE
    header_text = Text(title, style=f"bold {palette.accent}")
    if subtitle:
        header_text.append(f"\n{subtitle}", style=f"dim {palette.text_bright}")
    panel = Panel(
        header_text,
        border_style=palette.border,
        padding=(1, 2),
        expand=False,
    )
    console.print(panel)


def render_divider(width: int = 60) -> None:
    """Render a styled divider."""
    console.print(Text("─" * width, style=f"dim {DEFAULT_PALETTE.border}"))
