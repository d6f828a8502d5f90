"""CLI entry point for obsid."""

import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click

from .config import Config, load_config
from .exceptions import ConfigError, GitError, NoMatchError, ObsidError, TimeframeError, VaultError
from .formatter import format_project_entry
from .git import find_repository, get_changed_files, get_commits
from .utils import format_long_date, format_time_range, parse_timeframe
from .vault import Vault


def vault_options(func):
    """Options shared by every command that reads the vault."""
    options = [
        click.option(
            "--vault-path",
            type=click.Path(),
            default=None,
            help="Path to Obsidian vault (default: OBSID_VAULT_PATH env var)",
        ),
        click.option(
            "--daily-notes-dir",
            type=str,
            default=None,
            help="Daily notes folder inside the vault (default: Daily Notes)",
        ),
        click.option(
            "--date-format",
            type=str,
            default=None,
            help="Daily note filename format (default: YYYY-MM-DD-dddd)",
        ),
        click.option(
            "--verbose", "-v",
            is_flag=True,
            default=False,
            help="Enable verbose output",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load(vault_path, daily_notes_dir, date_format, verbose, validate=True) -> Config:
    try:
        return load_config(
            vault_path=vault_path,
            daily_notes_dir=daily_notes_dir,
            date_format=date_format,
            verbose=verbose,
            validate=validate,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main():
    """Log programming project activity to Obsidian daily notes."""


def _note_format(vault: Vault, config: Config) -> str:
    """Format for a new note: whatever existing notes use, else the configured one."""
    try:
        detected = vault.detect_date_format(config.ambiguous_date_default)
    except (NoMatchError, VaultError) as e:
        if config.verbose:
            click.echo(f"  {e}; using configured format {config.date_format}")
        return config.date_format

    if config.verbose and detected.name != config.date_format:
        click.echo(f"  Existing notes use {detected.name} (configured: {config.date_format})")
    return detected.name


def _log_repository(
    target: Path,
    vault: Vault,
    config: Config,
    since: datetime,
    today: date,
    project: Optional[str],
    git_summary: bool,
    create_note: bool,
) -> bool:
    """Log one repository. Returns False when it had no commits to log."""
    repo = find_repository(target)
    name = project or repo.name

    commits = get_commits(
        repo, since, config.max_commits, ignore_merges=config.ignore_merge_commits
    )
    if not commits:
        if config.verbose:
            click.echo(f"  {name}: no commits since {since:%Y-%m-%d %H:%M}")
        return False

    files: list[str] = []
    if git_summary:
        try:
            files = get_changed_files(repo, since)
        except GitError as e:
            click.echo(f"Warning: could not get changed files for {name}: {e}", err=True)

    if vault.find_daily_note(today) is None:
        if not create_note:
            raise VaultError(
                f"Daily note does not exist for {format_long_date(today)}. "
                "Use --create-note to create it automatically."
            )
        created = vault.create_daily_note(today, _note_format(vault, config))
        click.echo(f"Created new daily note: {created.name}")

    content = format_project_entry(
        repo, commits, files, format_time_range(since), tags=config.add_tags
    )
    note_path = vault.append_project_entry(
        today, name, content, section_title=config.section_title
    )

    summary = f"Logged activity for {name} (commits: {len(commits)}"
    if files:
        summary += f", files: {len(files)}"
    click.echo(f"{summary}) -> {note_path.name}")
    return True


@main.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "--timeframe", "-t",
    default="1h",
    show_default=True,
    help="How far back to look (e.g. 30m, 2h, today, yesterday)",
)
@click.option(
    "--project", "-p",
    type=str,
    default=None,
    help="Override the project name used as the entry title",
)
@click.option(
    "--git-summary", "-g",
    is_flag=True,
    default=False,
    help="Include the files changed in the timeframe",
)
@click.option(
    "--create-note", "-c",
    is_flag=True,
    default=False,
    help="Create today's daily note if it doesn't exist",
)
@vault_options
def log(paths, timeframe, project, git_summary, create_note,
        vault_path, daily_notes_dir, date_format, verbose):
    """Log recent git activity of one or more repositories to today's note.

    PATHS are repositories (or directories inside them) and default to the
    current directory. Each repository gets its own entry under the
    Projects section; logging again replaces that entry.

    Example: obsid log . --timeframe 2h --git-summary
    """
    targets = paths or (".",)
    if project and len(targets) > 1:
        raise click.UsageError("--project can only be used with a single repository.")

    config = _load(vault_path, daily_notes_dir, date_format, verbose)

    try:
        since = parse_timeframe(timeframe)
    except TimeframeError as e:
        click.echo(f"Invalid timeframe: {e}", err=True)
        sys.exit(2)

    vault = Vault.from_config(config)
    if not vault.exists():
        click.echo(f"Vault not found at: {vault.path}", err=True)
        sys.exit(2)

    if verbose:
        click.echo(f"Vault path: {vault.path}")
        click.echo(f"Daily notes: {vault.daily_notes_path} ({vault.date_format})")
        click.echo(f"Since: {since:%Y-%m-%d %H:%M}")

    today = date.today()
    logged = 0
    failed = 0

    for target in targets:
        try:
            if _log_repository(
                Path(target), vault, config, since, today,
                project, git_summary, create_note,
            ):
                logged += 1
        except (ObsidError, OSError) as e:
            click.echo(f"Error logging {target}: {e}", err=True)
            failed += 1

    # Exit code
    if failed == len(targets):
        sys.exit(2)
    elif failed:
        click.echo(f"\nLogged {logged} of {len(targets)} repositories")
        sys.exit(1)
    elif logged == 0:
        click.echo("No new activity to log.")
    else:
        click.echo(f"\nLogged {logged} of {len(targets)} repositories")


@main.command()
@vault_options
def detect(vault_path, daily_notes_dir, date_format, verbose):
    """Show the date format used by the existing daily notes."""
    config = _load(vault_path, daily_notes_dir, date_format, verbose)
    vault = Vault.from_config(config)

    try:
        detected = vault.detect_date_format(config.ambiguous_date_default)
    except (NoMatchError, VaultError) as e:
        click.echo(f"Warning: {e}", err=True)
        click.echo(f"Using configured format: {config.date_format}")
        return

    click.echo(f"Detected format: {detected.name} (today: {detected.render(date.today())})")
    if detected.name != config.date_format:
        click.echo(
            f"Configured format is {config.date_format}; "
            f"set OBSID_DATE_FORMAT={detected.name} to match."
        )


@main.command("config")
@vault_options
def show_config(vault_path, daily_notes_dir, date_format, verbose):
    """Show the effective configuration."""
    config = _load(vault_path, daily_notes_dir, date_format, verbose, validate=False)

    for key, value in config.as_dict().items():
        if isinstance(value, list):
            value = ", ".join(value)
        click.echo(f"{key}: {value}")

    try:
        config.validate()
    except ConfigError as e:
        click.echo(f"\nConfiguration error: {e}", err=True)
        sys.exit(2)
