"""Daily note date formats: the pattern catalog, inference and rendering.

Every daily note filename layout obsid understands lives in ``DATE_FORMATS``.
Inference, rendering and lookup of existing notes all consult that one
ordered table. Its declaration order is both the matching priority (most
specific layouts first) and the tie-break order for the final vote.
"""

import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

from .exceptions import NoMatchError, VaultError

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
# Indexed by date.weekday()
WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

DD_MM_YYYY = "DD-MM-YYYY"
MM_DD_YYYY = "MM-DD-YYYY"
AMBIGUOUS_FORMATS = (DD_MM_YYYY, MM_DD_YYYY)

# Longer tokens first so "YYYY" never renders as two "YY".
_TOKEN_RE = re.compile(r"YYYY|YY|MMMM|MM|DD|dddd")
_TOKENS = {
    "YYYY": lambda day: f"{day.year:04d}",
    "YY": lambda day: f"{day.year % 100:02d}",
    "MMMM": lambda day: MONTH_NAMES[day.month - 1],
    "MM": lambda day: f"{day.month:02d}",
    "DD": lambda day: f"{day.day:02d}",
    "dddd": lambda day: WEEKDAY_NAMES[day.weekday()],
}


@dataclass(frozen=True)
class DateFormat:
    """One daily note filename layout.

    Attributes:
        name: The layout in token form, e.g. ``YYYY-MM-DD-dddd``.
        pattern: Regex a filename stem must fully match to belong to this layout.
        ambiguous: True for the numeric day/month layouts that share a shape
            and can only be told apart by the values in the filenames.
    """

    name: str
    pattern: "re.Pattern[str]"
    ambiguous: bool = False

    def matches(self, stem: str) -> bool:
        return self.pattern.fullmatch(stem) is not None

    def render(self, day: date) -> str:
        return render_stem(self.name, day)


def _layout(name: str, regex: str, ambiguous: bool = False) -> DateFormat:
    return DateFormat(name=name, pattern=re.compile(regex, re.ASCII), ambiguous=ambiguous)


_MONTH = r"(?:0?[1-9]|1[0-2])"
_DAY = r"(?:0?[1-9]|[12]\d|3[01])"
_DAY_MONTH_YEAR = r"\d{1,2}-\d{1,2}-\d{4}"

DATE_FORMATS = (
    _layout("YYYY-MM-DD-dddd", r"\d{4}-\d{2}-\d{2}-[A-Za-z]+"),      # 2025-07-19-Saturday
    _layout("YYYY-MM-DD dddd", r"\d{4}-\d{2}-\d{2} [A-Za-z]+"),      # 2025-07-19 Saturday
    _layout("YYYY-MM-DD", r"\d{4}-\d{2}-\d{2}"),                     # 2025-07-19
    _layout("YYYY/MM/DD", r"\d{4}/\d{2}/\d{2}"),                     # 2025/07/19
    _layout("MMMM DD, YYYY", r"[A-Z][a-z]+ \d{1,2}, \d{4}"),         # July 19, 2025
    _layout("DD MMMM YYYY", r"\d{1,2} [A-Z][a-z]+ \d{4}"),           # 19 July 2025
    _layout(DD_MM_YYYY, _DAY_MONTH_YEAR, ambiguous=True),            # 19-07-2025
    _layout(MM_DD_YYYY, _DAY_MONTH_YEAR, ambiguous=True),            # 07-19-2025
    _layout("YY-MM-DD", r"\d{2}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12]\d|3[01])"),  # 25-07-19
    _layout("MM-DD-YY", rf"{_MONTH}-{_DAY}-\d{{2}}"),                # 07-19-25
)

_BY_NAME = {fmt.name: fmt for fmt in DATE_FORMATS}


def get_date_format(name: str) -> DateFormat:
    """Look up a catalog entry by its token name."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise NoMatchError(f"Unknown date format: {name}") from None


def render_stem(layout: Union[str, DateFormat], day: date) -> str:
    """Render the filename stem for ``day``.

    ``layout`` may be a catalog entry or any token string; characters that
    are not tokens are copied literally. Month and weekday names are always
    English, independent of the process locale.
    """
    if isinstance(layout, DateFormat):
        layout = layout.name
    return _TOKEN_RE.sub(lambda m: _TOKENS[m.group(0)](day), layout)


def _first_match(stem: str) -> Optional[DateFormat]:
    for fmt in DATE_FORMATS:
        if fmt.matches(stem):
            return fmt
    return None


def resolve_ambiguous(stems: Iterable[str], default: str = MM_DD_YYYY) -> str:
    """Decide between DD-MM-YYYY and MM-DD-YYYY for ``N-N-YYYY`` stems.

    A component above 12 cannot be a month, so it marks its slot as the day.
    Equal evidence on both sides (including none at all) returns ``default``.
    """
    day_first = 0
    month_first = 0
    for stem in stems:
        first, second, _ = stem.split("-")
        if int(first) > 12:
            day_first += 1
        if int(second) > 12:
            month_first += 1

    if day_first > month_first:
        return DD_MM_YYYY
    if month_first > day_first:
        return MM_DD_YYYY
    return default


def infer_format(stems: Iterable[str], ambiguous_default: str = MM_DD_YYYY) -> DateFormat:
    """Pick the catalog layout that best explains a sample of filename stems.

    Each stem votes once, for the first layout (in catalog order) it matches.
    Stems of the shared ``N-N-YYYY`` shape are held back and their combined
    count goes to whichever of DD-MM-YYYY / MM-DD-YYYY their values support.
    The layout with the most votes wins; ties go to the earlier catalog entry.

    Args:
        stems: Filenames with the extension already stripped.
        ambiguous_default: Layout used when the day/month evidence is tied.

    Returns:
        The winning DateFormat.

    Raises:
        NoMatchError: If the sample is empty or nothing in it matches.
    """
    if ambiguous_default not in AMBIGUOUS_FORMATS:
        raise ValueError(
            f"ambiguous_default must be one of {', '.join(AMBIGUOUS_FORMATS)}, "
            f"got {ambiguous_default!r}"
        )

    votes = {fmt.name: 0 for fmt in DATE_FORMATS}
    held_back: list[str] = []

    for stem in stems:
        fmt = _first_match(stem)
        if fmt is None:
            continue
        if fmt.ambiguous:
            held_back.append(stem)
        else:
            votes[fmt.name] += 1

    if held_back:
        votes[resolve_ambiguous(held_back, ambiguous_default)] += len(held_back)

    # max() keeps the first of equal elements, i.e. the earliest declared layout
    best = max(DATE_FORMATS, key=lambda fmt: votes[fmt.name])
    if votes[best.name] == 0:
        raise NoMatchError("No filename matches a known daily note date format")
    return best


def find_existing_for_date(
    directory: Path, day: date, extension: str = ".md"
) -> Optional[Path]:
    """Return the first existing note for ``day`` under any catalog layout.

    Layouts are tried in catalog order, so a vault whose naming drifted from
    the configured format still resolves to its note.
    """
    directory = Path(directory)
    for fmt in DATE_FORMATS:
        candidate = directory / (fmt.render(day) + extension)
        if candidate.is_file():
            return candidate
    return None


def list_stems(directory: Path, extension: str = ".md") -> list[str]:
    """List the stems of files in ``directory`` that end with ``extension``."""
    directory = Path(directory)
    if not directory.is_dir():
        raise VaultError(f"Daily notes directory not found: {directory}")

    stems = []
    for entry in directory.iterdir():
        if entry.is_file() and entry.name.endswith(extension):
            stems.append(entry.name[: len(entry.name) - len(extension)])
    return sorted(stems)


def detect_date_format(
    directory: Path,
    extension: str = ".md",
    ambiguous_default: str = MM_DD_YYYY,
) -> DateFormat:
    """Infer the date format used by the notes already in ``directory``."""
    stems = list_stems(directory, extension)
    if not stems:
        raise NoMatchError(f"No daily note files found in {directory}")
    return infer_format(stems, ambiguous_default)
