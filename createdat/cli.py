"""
Rename files after the date they were created.

Files in --source (default: current dir) are copied into --folder
(default: renamed) under a name built from their creation time:

    createdat                 photo.jpg -> renamed/photo-2024-07-17_14-30-05.jpg
    createdat -f -n -d        photo.jpg -> renamed/2024-07-17.jpg
    createdat -n -d IMG       photo.jpg -> renamed/IMG-2024-07-17.jpg

Only images are picked up unless --all or --extension is given.
"""
from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import (
    DEFAULT_DATE_PATTERN,
    DEFAULT_TARGET_FOLDER,
    FormatConfig,
    Position,
    TimeStyle,
    parse_extensions,
)
from .errors import FormatError, PlanError, TargetFolderError
from .executor import execute
from .naming import validate_pattern
from .planner import plan, scan_source


def build_config(
    name: str | None,
    extensions: tuple[str, ...],
    front: bool,
    no_name: bool,
    twelve: bool,
    date_only: bool,
    space: bool,
    date_format: str | None,
    suffix: bool,
    all_files: bool,
) -> FormatConfig:
    """Capture the command-line flags into an immutable FormatConfig."""
    # --date wins over --twelve; a custom --format has no time unless --twelve is set
    if date_only or (date_format and not twelve):
        time_style = TimeStyle.NONE
    elif twelve:
        time_style = TimeStyle.TWELVE_HOUR
    else:
        time_style = TimeStyle.TWENTY_FOUR_HOUR

    return FormatConfig(
        date_pattern=date_format or DEFAULT_DATE_PATTERN,
        time_style=time_style,
        position=Position.PREFIX if front else Position.SUFFIX,
        keep_original_name=not no_name,
        custom_name=name.strip() if name and name.strip() else None,
        custom_name_after_date=suffix,
        extension_filter=parse_extensions(extensions),
        all_files=all_files,
        time_separator=" " if space else "_",
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="createdat")
@click.argument("name", required=False)
@click.option(
    "-e", "--extension", "extensions",
    multiple=True,
    metavar="EXTS",
    help="Only rename these extensions (comma separated, repeatable), e.g. -e jpg,png.",
)
@click.option("-f", "--front", is_flag=True, help="Put date in front of the filename.")
@click.option("-n", "--no-name", is_flag=True, help="Remove the original filename.")
@click.option("-t", "--twelve", is_flag=True, help="Use 12-hour time instead of 24-hour.")
@click.option("-d", "--date", "date_only", is_flag=True, help="Date without time.")
@click.option("--space", is_flag=True, help="Use a space instead of an underscore between date and time.")
@click.option(
    "--format", "date_format",
    metavar="FORMAT",
    help="Custom date format, e.g. '%a %b %e %Y' = 'Wed Jul 17 2024'.",
)
@click.option(
    "-S", "--source",
    type=click.Path(path_type=Path, file_okay=False),
    default=".",
    show_default=True,
    help="Folder containing the files to rename.",
)
@click.option(
    "-F", "--folder",
    type=click.Path(path_type=Path, file_okay=False),
    default=DEFAULT_TARGET_FOLDER,
    show_default=True,
    help="Folder for the renamed files (created if missing).",
)
@click.option("-s", "--suffix", is_flag=True, help="Put the custom NAME after the date.")
@click.option("-p", "--preview", is_flag=True, help="Show the new names without touching any file.")
@click.option("-a", "--all", "all_files", is_flag=True, help="Rename all files, not just images.")
@click.option("-m", "--move", is_flag=True, help="Move files instead of copying them.")
@click.option("--progress/--no-progress", default=False, show_default=True, help="Progress bar.")
def main(
    name: str | None,
    extensions: tuple[str, ...],
    front: bool,
    no_name: bool,
    twelve: bool,
    date_only: bool,
    space: bool,
    date_format: str | None,
    source: Path,
    folder: Path,
    suffix: bool,
    preview: bool,
    all_files: bool,
    move: bool,
    progress: bool,
):
    """
    Rename files with the date they were created.

    NAME is an optional custom name added to every renamed file.
    """
    config = build_config(name, extensions, front, no_name, twelve, date_only,
                          space, date_format, suffix, all_files)

    source = source.expanduser().resolve()
    folder = folder.expanduser()

    try:
        validate_pattern(config.date_pattern)
        rename_plan = plan(scan_source(source), config)
    except (FormatError, PlanError) as e:
        raise SystemExit(str(e))

    if preview:
        report = execute(rename_plan, source, folder, preview=True)
        for line in report.listing:
            click.echo(f"[DRYRUN] {line}")
        click.echo(f"\n{len(rename_plan)} file(s) would be written to {folder}")
        return

    try:
        report = execute(rename_plan, source, folder, preview=False, move=move, progress=progress)
    except TargetFolderError as e:
        raise SystemExit(str(e))

    tag = "[MOVE]" if move else "[COPY]"
    for entry, dest in report.completed:
        click.echo(f"{tag} {entry.source.path.name} -> {dest}")
    for entry, err in report.failed:
        click.echo(f"[ERROR] {entry.source.path.name}: {err}", err=True)

    click.echo("\nSummary")
    click.echo(f"  Files  : {len(rename_plan)}")
    click.echo(f"  {'Moved' if move else 'Copied':<6} : {report.succeeded}")
    click.echo(f"  Failed : {len(report.failed)}")
    click.echo(f"  Folder : {folder}")

    if not report.ok:
        raise SystemExit(f"{len(report.failed)} of {len(rename_plan)} file(s) failed.")

