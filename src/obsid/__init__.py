"""Log programming project activity to Obsidian daily notes."""

__version__ = "0.1.0"
