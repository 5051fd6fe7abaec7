"""pdfdrop CLI - pick PDF files and upload them one request at a time."""

import sys
from typing import Iterable, List, Optional

import click

from .client import UploadClient, UploadOutcome
from .config import ConfigManager
from .controller import UploadFormController
from .errors import PdfDropError
from .log import setup_logging
from .notices import ConsoleNotifier
from .picker import PathPicker
from .state import SelectionState
from .ui import console, render_error, render_outcomes, render_selection


class PdfDropApp:
    """Wires config, picker, client, and notifier into a form controller."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        base_url: Optional[str] = None,
        field_name: Optional[str] = None,
        confirm_notices: Optional[bool] = None,
        verbose: bool = False,
    ):
        self.config = ConfigManager(config_path)
        self.verbose = verbose
        setup_logging(self.config.get_logging_config()["level"], verbose=verbose)

        try:
            self.upload_config = self.config.get_upload_config()
        except ValueError as e:
            raise click.ClickException(str(e))
        if base_url:
            self.upload_config.base_url = base_url
        if field_name:
            self.upload_config.field_name = field_name
        if confirm_notices is not None:
            self.upload_config.confirm_notices = confirm_notices

        self.picker = PathPicker(accept=self.upload_config.accept)
        self.client = UploadClient(self.upload_config)
        self.notifier = ConsoleNotifier(confirm=self.upload_config.confirm_notices)
        self.controller = UploadFormController(
            picker=self.picker,
            client=self.client,
            notifier=self.notifier,
            invalid_file_policy=self.upload_config.invalid_file_policy,
            clear_after_upload=self.upload_config.clear_after_upload,
        )
        self.last_picked = 0

    def select(self, paths: Iterable[str]) -> SelectionState:
        """Feed paths to the picker and run AddFiles on the result."""
        try:
            picked = self.picker.choose(paths)
        except PdfDropError:
            self.picker.reset()
            raise
        self.last_picked = len(picked)
        return self.controller.add_from_picker()

    def upload(self) -> List[UploadOutcome]:
        """Run SubmitSelection and report the failed files."""
        outcomes = self.controller.submit_selection()
        render_outcomes(outcomes, verbose=self.verbose)
        return outcomes

    def close(self) -> None:
        self.client.close()


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and responses")
@click.pass_context
def cli(ctx, config_path, verbose):
    """PDFDROP - select PDF files and upload them.

    Each file is sent as its own multipart request.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("paths", nargs=-1, required=True)
@click.option("--endpoint", "-e", help="Base URL of the upload server")
@click.option("--field", "-f", help="Multipart field name for the file")
@click.option("--yes", "-y", is_flag=True, help="Do not wait for Enter on notices")
@click.pass_context
def upload(ctx, paths, endpoint, field, yes):
    """Select PATHS and upload each PDF."""
    app = PdfDropApp(
        config_path=ctx.obj["config_path"],
        base_url=endpoint,
        field_name=field,
        confirm_notices=False if yes else None,
        verbose=ctx.obj["verbose"],
    )
    try:
        state = app.select(paths)
        if state.is_unset:
            sys.exit(1)
        rejected = len(state) < app.last_picked
        render_selection(state)
        outcomes = app.upload()
    except PdfDropError as e:
        raise click.ClickException(str(e))
    finally:
        app.close()

    if rejected or any(not o.ok for o in outcomes):
        sys.exit(1)


@cli.command()
@click.argument("paths", nargs=-1)
@click.option("--endpoint", "-e", help="Base URL of the upload server")
@click.option("--field", "-f", help="Multipart field name for the file")
@click.pass_context
def shell(ctx, paths, endpoint, field):
    """Open the interactive upload form."""
    from .form import UploadFormREPL

    app = PdfDropApp(
        config_path=ctx.obj["config_path"],
        base_url=endpoint,
        field_name=field,
        verbose=ctx.obj["verbose"],
    )
    try:
        repl = UploadFormREPL(app)
        if paths:
            repl.add(list(paths))
        repl.run()
    finally:
        app.close()


@cli.group(invoke_without_command=True)
@click.pass_context
def config(ctx):
    """Show configuration."""
    if ctx.invoked_subcommand is not None:
        return

    manager = ConfigManager(ctx.obj["config_path"])
    try:
        upload_config = manager.get_upload_config()
    except ValueError as e:
        raise click.ClickException(str(e))

    console.print(f"Config file: {manager.config_path}")
    console.print(f"Upload URL: {upload_config.upload_url}")
    console.print(f"Field name: {upload_config.field_name}")
    console.print(f"Timeout: {upload_config.timeout if upload_config.timeout is not None else 'none'}")
    console.print(f"Accept: {upload_config.accept}")
    console.print(f"Invalid file policy: {upload_config.invalid_file_policy}")
    console.print(f"Clear after upload: {upload_config.clear_after_upload}")
    console.print(f"Log level: {manager.get_logging_config()['level']}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key, value):
    """Set KEY (like endpoint.base_url) to VALUE and save."""
    manager = ConfigManager(ctx.obj["config_path"])
    try:
        parsed = manager.set_value(key, value)
        manager.get_upload_config()
    except ValueError as e:
        raise click.ClickException(str(e))
    manager.save()
    console.print(f"{key} = {parsed!r}", style="dim")


def main():
    """Entry point for the ``pdfdrop`` command."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        render_error("Interrupted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
