"""Daily notes in an Obsidian vault: locate, create and update them."""

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from .config import Config
from .date_formats import (
    MM_DD_YYYY,
    DateFormat,
    detect_date_format,
    find_existing_for_date,
    render_stem,
)
from .exceptions import VaultError
from .sections import merge_entry
from .utils import format_long_date

NOTE_EXTENSION = ".md"


def read_document(path: Path) -> list[str]:
    """Read a note as a list of lines without line endings.

    Only newlines separate lines; form feeds, U+2028 and other characters
    ``str.splitlines`` would break on stay inside their line.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise VaultError(f"Cannot read {path}: not valid UTF-8 ({e.reason})") from e

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def write_document(path: Path, lines: list[str]) -> None:
    """Replace a note's content in one step.

    The text goes to a sibling temp file first and is then renamed over the
    note, so readers see either the old or the new document.
    """
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text("\n".join(lines) + "\n", encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


@dataclass
class Vault:
    """An Obsidian vault and where its daily notes live."""

    path: Path
    daily_notes_dir: str = "Daily Notes"
    date_format: str = "YYYY-MM-DD-dddd"

    @classmethod
    def from_config(cls, config: Config) -> "Vault":
        return cls(
            path=Path(config.vault_path),
            daily_notes_dir=config.daily_notes_dir,
            date_format=config.date_format,
        )

    @property
    def daily_notes_path(self) -> Path:
        return self.path / self.daily_notes_dir

    def exists(self) -> bool:
        return self.path.is_dir()

    def daily_note_path(self, day: date, date_format: Optional[str] = None) -> Path:
        """Path of the note for ``day`` under the configured (or given) format."""
        stem = render_stem(date_format or self.date_format, day)
        return self.daily_notes_path / f"{stem}{NOTE_EXTENSION}"

    def find_daily_note(self, day: date) -> Optional[Path]:
        """Find the existing note for ``day`` whatever known format it was saved under.

        Falls back to the configured format last, which covers custom
        layouts that are not in the catalog.
        """
        found = find_existing_for_date(self.daily_notes_path, day, NOTE_EXTENSION)
        if found is not None:
            return found
        configured = self.daily_note_path(day)
        return configured if configured.is_file() else None

    def detect_date_format(self, ambiguous_default: str = MM_DD_YYYY) -> DateFormat:
        return detect_date_format(
            self.daily_notes_path,
            extension=NOTE_EXTENSION,
            ambiguous_default=ambiguous_default,
        )

    def create_daily_note(self, day: date, date_format: Optional[str] = None) -> Path:
        """Create an empty note for ``day`` with a title heading.

        Refuses to overwrite a note that is already there.
        """
        note_path = self.daily_note_path(day, date_format)
        if note_path.exists():
            raise VaultError(f"Daily note already exists: {note_path}")
        note_path.parent.mkdir(parents=True, exist_ok=True)
        write_document(note_path, [f"# {format_long_date(day)}"])
        return note_path

    def append_project_entry(
        self,
        day: date,
        project_name: str,
        content: str,
        section_title: str = "Projects",
    ) -> Path:
        """Merge a project's entry into the note for ``day``.

        Args:
            day: Date of the daily note to update.
            project_name: Entry title; an entry with this title is replaced.
            content: Markdown body of the entry.
            section_title: Level-2 section that holds project entries.

        Returns:
            The path of the updated note.

        Raises:
            VaultError: If no note exists for ``day``.
        """
        note_path = self.find_daily_note(day)
        if note_path is None:
            raise VaultError(
                f"No daily note for {format_long_date(day)} in {self.daily_notes_path}"
            )

        lines = read_document(note_path)
        write_document(note_path, merge_entry(lines, section_title, project_name, content))
        return note_path
