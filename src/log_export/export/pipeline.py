"""Export run orchestration: resolve, stage, archive, clean up."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable
from uuid import uuid4

from log_export.components import COMPONENT_ORDER, Component
from log_export.config import AppSettings
from log_export.discover.resolver import LogPathResolver, ResolvedLogPath
from log_export.export.archive import (
    archive_name,
    remove_staged_files,
    stage_file,
    unused_archive_path,
    write_archive,
)
from log_export.utils.paths import ensure_directory
from log_export.utils.time_utils import now_utc

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class ExportRunOptions:
    """Components and destination selected for one run."""

    components: tuple[Component, ...]
    destination: Path
    datastore_folder: str | None = None
    dry_run: bool = False

    @classmethod
    def from_flags(
        cls,
        *,
        server: bool = False,
        portal: bool = False,
        datastore: bool = False,
        destination: Path | None = None,
        datastore_folder: str | None = None,
        dry_run: bool = False,
    ) -> "ExportRunOptions":
        """Build options in fixed component order; no destination means the current directory."""

        requested = {"server": server, "portal": portal, "datastore": datastore}
        components = tuple(component for component in COMPONENT_ORDER if requested[component])
        resolved_destination = (destination or Path.cwd()).resolve()
        return cls(
            components=components,
            destination=resolved_destination,
            datastore_folder=datastore_folder if datastore else None,
            dry_run=dry_run,
        )

    @property
    def has_components(self) -> bool:
        return len(self.components) > 0


@dataclass(frozen=True, slots=True)
class ExportRunResult:
    """Return object for export run outcomes."""

    run_id: str
    resolved: list[ResolvedLogPath] = field(default_factory=list)
    staged_files: list[Path] = field(default_factory=list)
    removed_files: list[Path] = field(default_factory=list)
    archive_path: Path | None = None


def _noop_progress(message: str) -> None:
    return None


def run_export(
    settings: AppSettings,
    resolver: LogPathResolver,
    *,
    options: ExportRunOptions,
    logger: logging.Logger | None = None,
    on_progress: ProgressCallback | None = None,
) -> ExportRunResult:
    """Run one export over the selected components.

    The first failure aborts the run; copies staged before it are removed and
    no archive is written.
    """

    effective_logger = logger or LOGGER
    progress = on_progress or _noop_progress
    run_id = f"export-run-{uuid4().hex[:12]}"

    if not options.has_components:
        effective_logger.info("export_run.nothing_requested run_id=%s", run_id)
        return ExportRunResult(run_id=run_id)

    effective_logger.info(
        "export_run.start run_id=%s components=%s destination=%s dry_run=%s",
        run_id,
        ",".join(options.components),
        options.destination,
        options.dry_run,
    )
    if not options.dry_run:
        ensure_directory(options.destination)

    resolved: list[ResolvedLogPath] = []
    staged: list[Path] = []
    try:
        for component in options.components:
            resolved_path = resolver.resolve(component, datastore_folder=options.datastore_folder)
            resolved.append(resolved_path)
            progress(f"{component}: found {resolved_path.path}")
            if options.dry_run:
                continue

            name_prefix = component if settings.export.prefix_component else None
            staged_path = stage_file(resolved_path.path, options.destination, name_prefix=name_prefix)
            staged.append(staged_path)
            progress(f"{component}: copied to {staged_path}")
            effective_logger.info(
                "export_run.staged run_id=%s component=%s source=%s staged=%s",
                run_id,
                component,
                resolved_path.path,
                staged_path,
            )

        archive_path: Path | None = None
        if staged:
            archive_path = write_archive(
                staged,
                unused_archive_path(options.destination / archive_name(settings.export.archive_prefix, now_utc())),
                compression=settings.export.compression,
            )
            progress(f"Created archive {archive_path}")
    except BaseException:
        if staged:
            effective_logger.warning(
                "export_run.aborted run_id=%s removing_staged=%s",
                run_id,
                len(staged),
            )
            remove_staged_files(staged, logger=effective_logger)
        raise

    removed = remove_staged_files(staged, logger=effective_logger)
    if removed:
        progress(f"Removed {len(removed)} staged file(s)")

    effective_logger.info(
        "export_run.summary run_id=%s resolved=%s staged=%s removed=%s archive=%s",
        run_id,
        len(resolved),
        len(staged),
        len(removed),
        archive_path,
    )
    return ExportRunResult(
        run_id=run_id,
        resolved=resolved,
        staged_files=staged,
        removed_files=removed,
        archive_path=archive_path,
    )
