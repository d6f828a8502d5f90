"""Data models for obsid."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass
class Commit:
    """A single commit read from git log."""

    id: str
    message: str  # subject line only
    author: str
    timestamp: datetime


@dataclass
class Repository:
    """A git working tree whose activity gets logged."""

    path: Path
    name: str
    branch: str = ""
