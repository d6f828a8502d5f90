"""Markdown formatting of a project's activity entry."""

from typing import Optional

from .models import Commit, Repository
from .utils import project_tag

MAX_COMMIT_LINES = 5
MAX_FILES_SHOWN = 5


def format_work_summary(commits: list[Commit], files: list[str]) -> str:
    """One-line count of the session's work, e.g. "3 commits, 2 files"."""
    if not commits and not files:
        return "code review/exploration"

    parts = []
    if commits:
        parts.append("1 commit" if len(commits) == 1 else f"{len(commits)} commits")
    if files:
        parts.append("1 file" if len(files) == 1 else f"{len(files)} files")
    return ", ".join(parts)


def commit_lines(commits: list[Commit], limit: int = MAX_COMMIT_LINES) -> list[str]:
    """Unique, non-empty commit subjects in log order, at most ``limit``."""
    seen = set()
    lines = []
    for commit in commits:
        message = commit.message.strip()
        if not message or message in seen:
            continue
        seen.add(message)
        lines.append(message)
        if len(lines) == limit:
            break
    return lines


def format_files(files: list[str], limit: int = MAX_FILES_SHOWN) -> str:
    shown = ", ".join(f"`{name}`" for name in files[:limit])
    hidden = len(files) - limit
    if hidden > 0:
        shown += f" (+{hidden} more)"
    return shown


def format_project_entry(
    repo: Repository,
    commits: list[Commit],
    files: list[str],
    time_range: str,
    tags: Optional[list[str]] = None,
) -> str:
    """Format the body of a project's entry in the daily note.

    The entry heading itself is added when the body is merged into the note.
    """
    lines = [f"**{time_range}** • {format_work_summary(commits, files)}", ""]

    subjects = commit_lines(commits)
    if subjects:
        lines.extend(f"- {subject}" for subject in subjects)
        lines.append("")

    if files:
        lines.extend([f"**Files:** {format_files(files)}", ""])

    tag_line = [f"#{project_tag(repo.name)}"]
    for tag in tags or []:
        tag = tag if tag.startswith("#") else f"#{tag}"
        if tag not in tag_line:
            tag_line.append(tag)
    lines.append(" ".join(tag_line))

    return "\n".join(lines)
