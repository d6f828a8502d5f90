"""Configuration loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .date_formats import AMBIGUOUS_FORMATS, MM_DD_YYYY
from .exceptions import ConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class Config:
    """Application configuration."""

    vault_path: Optional[Path] = None
    daily_notes_dir: str = "Daily Notes"
    date_format: str = "YYYY-MM-DD-dddd"
    ambiguous_date_default: str = MM_DD_YYYY
    section_title: str = "Projects"
    max_commits: int = 10
    ignore_merge_commits: bool = True
    add_tags: list[str] = field(default_factory=lambda: ["#programming"])
    verbose: bool = False

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.vault_path:
            raise ConfigError(
                "OBSID_VAULT_PATH is required. Set it in .env, the environment "
                "or pass --vault-path."
            )
        if not self.date_format.strip():
            raise ConfigError("date_format cannot be empty.")
        if self.ambiguous_date_default not in AMBIGUOUS_FORMATS:
            raise ConfigError(
                f"Unknown ambiguous date default: {self.ambiguous_date_default}. "
                f"Use {' or '.join(AMBIGUOUS_FORMATS)}."
            )
        if not self.section_title.strip():
            raise ConfigError("section_title cannot be empty.")
        if self.max_commits < 1:
            raise ConfigError("max_commits must be at least 1.")

    def as_dict(self) -> dict:
        return {
            "vault_path": str(self.vault_path) if self.vault_path else "",
            "daily_notes_dir": self.daily_notes_dir,
            "date_format": self.date_format,
            "ambiguous_date_default": self.ambiguous_date_default,
            "section_title": self.section_title,
            "max_commits": self.max_commits,
            "ignore_merge_commits": self.ignore_merge_commits,
            "add_tags": list(self.add_tags),
        }


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_config(
    vault_path: Optional[str] = None,
    daily_notes_dir: Optional[str] = None,
    date_format: Optional[str] = None,
    max_commits: Optional[int] = None,
    verbose: bool = False,
    validate: bool = True,
) -> Config:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()
    defaults = Config()

    raw_vault = vault_path or os.getenv("OBSID_VAULT_PATH", "")
    config = Config(
        vault_path=Path(raw_vault).expanduser() if raw_vault else None,
        daily_notes_dir=daily_notes_dir
        or os.getenv("OBSID_DAILY_NOTES_DIR", defaults.daily_notes_dir),
        date_format=date_format or os.getenv("OBSID_DATE_FORMAT", defaults.date_format),
        ambiguous_date_default=os.getenv(
            "OBSID_AMBIGUOUS_DATE_DEFAULT", defaults.ambiguous_date_default
        ),
        section_title=os.getenv("OBSID_SECTION_TITLE", defaults.section_title),
        max_commits=max_commits
        if max_commits is not None
        else _env_int("OBSID_MAX_COMMITS", defaults.max_commits),
        ignore_merge_commits=_env_bool(
            "OBSID_IGNORE_MERGE_COMMITS", defaults.ignore_merge_commits
        ),
        add_tags=_env_list("OBSID_ADD_TAGS", defaults.add_tags),
        verbose=verbose,
    )

    if validate:
        config.validate()
    return config
