"""Interactive upload form.

A line-oriented stand-in for the upload page: pick files, preview them,
cancel, or upload. Cancel and upload are disabled while nothing is selected.
"""

import shlex
from typing import List

from .errors import PdfDropError
from .ui import (
    console,
    render_actions,
    render_divider,
    render_error,
    render_header,
    render_selection,
)
from .ui.theme import DEFAULT_PALETTE


class UploadFormREPL:
    """Prompt loop driving a PdfDropApp's form controller."""

    def __init__(self, app):
        self.app = app
        self.controller = app.controller

    def welcome(self) -> None:
        render_header("Upload your files", f"Endpoint: {self.app.upload_config.upload_url}")
        console.print("Type help for commands.\n", style="dim")

    def show_help(self) -> None:
        console.print("\nCommands:", style=f"bold {DEFAULT_PALETTE.accent}")
        console.print("  add <path>...    - Select PDF files (directories add their PDFs)")
        console.print("  list             - Show the selected files")
        console.print("  cancel           - Clear the selection")
        console.print("  upload           - Upload each selected file")
        console.print("  help             - Show this help")
        console.print("  quit, exit       - Leave the form\n")

    def show_form(self) -> None:
        render_divider()
        render_selection(self.controller.state)
        render_actions(self.controller.can_cancel, self.controller.can_submit)

    def add(self, paths: List[str]) -> None:
        if not paths:
            console.print("Usage: add <path>...", style="dim")
            return
        try:
            self.app.select(paths)
        except PdfDropError as e:
            render_error(str(e))
            return
        self.show_form()

    def cancel(self) -> None:
        if not self.controller.can_cancel:
            console.print("cancel is disabled: no file selected.", style="dim")
            return
        self.controller.cancel_selection()
        self.show_form()

    def upload(self) -> None:
        if not self.controller.can_submit:
            console.print("upload is disabled: no file selected.", style="dim")
            return
        self.app.upload()
        self.show_form()

    def handle_command(self, line: str) -> bool:
        """Handle one input line. Returns True to continue, False to exit."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            render_error(f"Could not parse input: {e}")
            return True
        if not parts:
            return True

        cmd = parts[0].lower()
        args = parts[1:]

        if cmd in ("exit", "quit"):
            return False
        elif cmd == "add":
            self.add(args)
        elif cmd == "list":
            self.show_form()
        elif cmd == "cancel":
            self.cancel()
        elif cmd == "upload":
            self.upload()
        elif cmd == "help":
            self.show_help()
        else:
            console.print(f"Unknown command: {cmd}", style="dim red")

        return True

    def run(self) -> None:
        """Start the form loop."""
        self.welcome()
        self.show_form()

        try:
            while True:
                try:
                    line = input("pdfdrop > ")
                    if not self.handle_command(line):
                        break
                except KeyboardInterrupt:
                    console.print("\n")
                    continue
        except EOFError:
            console.print()
