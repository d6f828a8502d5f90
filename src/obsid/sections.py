"""Insert or replace a named entry inside a markdown section.

Only whole lines and three heading levels are understood: a line starting
with ``# ``, ``## `` or ``### `` is a level 1, 2 or 3 heading. Everything
else is body text and is carried through untouched.
"""

from typing import Optional

_HEADING_PREFIXES = (("# ", 1), ("## ", 2), ("### ", 3))


def heading_level(line: str) -> Optional[int]:
    """Return 1, 2 or 3 for a heading line, None for anything else."""
    for prefix, level in _HEADING_PREFIXES:
        if line.startswith(prefix):
            return level
    return None


def _is_heading_at_most(line: str, max_level: int) -> bool:
    level = heading_level(line)
    return level is not None and level <= max_level


def render_entry(entry_title: str, entry_body: str) -> list[str]:
    """Lines of a level-3 entry: heading, body, one blank separator."""
    body = entry_body.rstrip("\n")
    body_lines = body.split("\n") if body else []
    return [f"### {entry_title}", *body_lines, ""]


def merge_entry(
    lines: list[str],
    section_title: str,
    entry_title: str,
    entry_body: str,
) -> list[str]:
    """Put ``### entry_title`` with ``entry_body`` under ``## section_title``.

    An existing entry of the same title directly under the section is
    replaced in full: from its heading up to the next level 1-3 heading (or
    the end of the document). Otherwise the entry is inserted at the end of
    the section, before the next level 1-2 heading. A missing section is
    appended to the end of the document first.

    The input list is left untouched; a new list is returned.

    Args:
        lines: The document, one string per line, without line endings.
        section_title: Title of the level-2 section, e.g. "Projects".
        entry_title: Title of the level-3 entry; matched exactly.
        entry_body: Entry content; may span several lines.

    Returns:
        The full new document as a list of lines.
    """
    lines = list(lines)
    section_heading = f"## {section_title}"
    entry_heading = f"### {entry_title}"

    try:
        section_index = lines.index(section_heading)
    except ValueError:
        lines.extend(["", section_heading, ""])
        section_index = len(lines) - 2

    # The section runs until the next level 1-2 heading
    section_end = len(lines)
    entry_start = None
    for i in range(section_index + 1, len(lines)):
        if _is_heading_at_most(lines[i], 2):
            section_end = i
            break
        if entry_start is None and lines[i] == entry_heading:
            entry_start = i

    new_entry = render_entry(entry_title, entry_body)

    if entry_start is None:
        return lines[:section_end] + new_entry + lines[section_end:]

    entry_end = len(lines)
    for i in range(entry_start + 1, len(lines)):
        if _is_heading_at_most(lines[i], 3):
            entry_end = i
            break

    return lines[:entry_start] + new_entry + lines[entry_end:]
