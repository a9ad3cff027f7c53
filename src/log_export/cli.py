"""Typer CLI entrypoint for log_export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import typer
import yaml

from log_export.components import DataStoreFolder, build_component_table
from log_export.config import AppSettings, load_settings
from log_export.discover.resolver import LogPathResolver
from log_export.errors import FolderChoiceError, LogExportError
from log_export.export.pipeline import ExportRunOptions, run_export
from log_export.logging_utils import configure_logging

NOTHING_REQUESTED_MESSAGE = (
    "No components selected. Pass one or more of -server, -portal, -datastore (see -help)."
)

app = typer.Typer(
    add_completion=False,
    help="Collect the current server, portal and data store logs into one ZIP archive.",
)


def _load_and_configure_logger(config_file: Path | None) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    logger = configure_logging(settings.logging.log_file, level=settings.logging.level)
    return settings, logger


def prompt_datastore_folder(choices: Sequence[DataStoreFolder]) -> DataStoreFolder:
    """Ask on the console which data store log folder to export."""

    typer.echo("Select the data store log folder:")
    for index, folder in enumerate(choices, start=1):
        typer.echo(f"  {index}. {folder}")
    response = str(typer.prompt("Folder number"))
    try:
        selected = int(response.strip())
    except ValueError as exc:
        raise FolderChoiceError(f"'{response}' is not a folder number.") from exc
    if not 1 <= selected <= len(choices):
        raise FolderChoiceError(f"Folder number must be between 1 and {len(choices)}, got {selected}.")
    return choices[selected - 1]


@app.command(context_settings={"help_option_names": ["-help", "--help", "-h"]})
def export(
    server: bool = typer.Option(False, "-server", help="Export the newest server log."),
    portal: bool = typer.Option(False, "-portal", help="Export the newest portal log."),
    datastore: bool = typer.Option(False, "-datastore", help="Export the newest data store log."),
    datastore_folder: str | None = typer.Option(
        None,
        "-datastorefolder",
        help="Data store log folder: server, database, elasticsearch or tilecache. Prompts when omitted.",
    ),
    destination: Path | None = typer.Option(
        None,
        "-destination",
        help="Directory for staged copies and the archive. Defaults to the current directory.",
        file_okay=False,
        dir_okay=True,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Resolve and print log paths without copying or archiving.",
    ),
    show_config: bool = typer.Option(
        False,
        "--show-config",
        help="Print the effective configuration and exit.",
    ),
    pause: bool = typer.Option(
        True,
        "--pause/--no-pause",
        help="Wait for a key press before exiting (interactive consoles only).",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Settings YAML path; must exist when given.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Copy the newest log of each selected component, zip the copies, and delete them."""

    settings, logger = _load_and_configure_logger(config_file)
    if show_config:
        typer.echo(yaml.safe_dump(settings.as_dict(), sort_keys=False))
        return

    options = ExportRunOptions.from_flags(
        server=server,
        portal=portal,
        datastore=datastore,
        destination=destination,
        datastore_folder=datastore_folder,
        dry_run=dry_run,
    )
    try:
        if not options.has_components:
            typer.echo(NOTHING_REQUESTED_MESSAGE)
            return

        typer.echo(f"Destination directory: {options.destination}")
        resolver = LogPathResolver(
            build_component_table(settings),
            chooser=prompt_datastore_folder,
            logger=logger,
        )
        try:
            result = run_export(settings, resolver, options=options, logger=logger, on_progress=typer.echo)
        except (LogExportError, OSError) as exc:
            logger.error("export.failed components=%s error=%s", ",".join(options.components), exc)
            typer.echo(f"Export failed: {exc}", err=True)
            raise typer.Exit(code=1) from exc

        typer.echo(f"run_id: {result.run_id}")
        typer.echo(f"resolved_total: {len(result.resolved)}")
        typer.echo(f"archive_path: {result.archive_path}")
    finally:
        if pause:
            typer.pause()


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
