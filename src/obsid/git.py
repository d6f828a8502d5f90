"""Read commit activity from a git working tree."""

import subprocess
from datetime import datetime
from pathlib import Path

from .exceptions import GitError
from .models import Commit, Repository

# ASCII unit separator; cannot appear in a commit subject
_FIELD_SEP = "\x1f"
_LOG_FORMAT = _FIELD_SEP.join(["%H", "%s", "%an", "%aI"])


def _run_git(repo_path: Path, *args: str, timeout_s: float = 15.0) -> str:
    """Run a git command in ``repo_path`` and return its stdout."""
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(repo_path),
            text=True,
            capture_output=True,
            check=False,
            timeout=timeout_s,
        )
    except FileNotFoundError as e:
        raise GitError("git executable not found on PATH") from e
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {args[0]} timed out after {timeout_s:.0f}s") from e

    if proc.returncode != 0:
        err = " ".join(proc.stderr.strip().split()) or f"exit={proc.returncode}"
        raise GitError(f"git {args[0]} failed in {repo_path}: {err}")
    return proc.stdout


def find_repository(start: Path) -> Repository:
    """Find the repository containing ``start`` by walking up to a ``.git`` entry."""
    current = Path(start).expanduser().resolve()
    for directory in (current, *current.parents):
        if (directory / ".git").exists():
            try:
                branch = _run_git(directory, "rev-parse", "--abbrev-ref", "HEAD").strip()
            except GitError:
                branch = ""
            return Repository(path=directory, name=directory.name, branch=branch)
    raise GitError(f"Not a git repository: {start}")


def _since_arg(since: datetime) -> str:
    return "--since=" + since.strftime("%Y-%m-%d %H:%M:%S")


def parse_log(output: str) -> list[Commit]:
    """Parse ``git log`` output produced with the unit-separated pretty format."""
    commits = []
    for line in output.splitlines():
        parts = line.split(_FIELD_SEP)
        if len(parts) != 4:
            continue
        commit_id, message, author, stamp = parts
        try:
            timestamp = datetime.fromisoformat(stamp)
        except ValueError:
            continue
        commits.append(
            Commit(id=commit_id, message=message, author=author, timestamp=timestamp)
        )
    return commits


def get_commits(
    repo: Repository,
    since: datetime,
    max_commits: int,
    ignore_merges: bool = True,
) -> list[Commit]:
    """Commits made since ``since``, newest first."""
    args = [
        "log",
        _since_arg(since),
        f"--pretty=format:{_LOG_FORMAT}",
        f"--max-count={max_commits}",
    ]
    if ignore_merges:
        args.append("--no-merges")
    return parse_log(_run_git(repo.path, *args))


def get_changed_files(repo: Repository, since: datetime) -> list[str]:
    """Paths touched by commits since ``since``, first-seen order, no duplicates."""
    output = _run_git(repo.path, "log", _since_arg(since), "--name-only", "--pretty=format:")
    files: list[str] = []
    seen = set()
    for line in output.splitlines():
        name = line.strip()
        if name and name not in seen:
            seen.add(name)
            files.append(name)
    return files
