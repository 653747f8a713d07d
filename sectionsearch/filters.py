"""
Structured filters.

A filter is a (key, data) pair. A section passes a list of filters if it
passes every filter whose data is not None (AND semantics).

Text filters are plain substring checks. Note the case handling differs per key
and is kept as-is:
- dept / desc: only the section side is lower-cased
- title: both sides are lower-cased
- instr: instructor names are lower-cased, the filter text is not
- code: the filter text is tokenized without lower-casing

days / area / time / campus are accepted but do not filter anything yet.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Union

from sectionsearch.model import Section, pad_number
from sectionsearch.tokens import tokenize

logger = logging.getLogger(__name__)


class FilterKey(str, Enum):
    DEPARTMENT = "dept"
    TITLE = "title"
    CAMPUS = "campus"
    DESCRIPTION = "desc"
    COURSE_CODE = "code"
    INSTRUCTOR = "instr"
    SCHEDULE_DAYS = "days"
    COURSE_AREA = "area"
    MEETING_TIME = "time"


# matches a filter keyword at the end of the search box text, e.g. "intro dept"
FILTER_KEY_RE = re.compile(r"\b(" + "|".join(k.value for k in FilterKey) + r")$", re.IGNORECASE)

TEXT_KEYS = frozenset(
    {
        FilterKey.DEPARTMENT,
        FilterKey.TITLE,
        FilterKey.DESCRIPTION,
        FilterKey.COURSE_CODE,
        FilterKey.INSTRUCTOR,
    }
)

WEEKDAYS = frozenset("MTWRFSU")


# ---------------------------------------------------------------------------
# Filter payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextData:
    text: str


@dataclass(frozen=True)
class ScheduleDaysData:
    days: FrozenSet[str]


@dataclass(frozen=True)
class MeetingTimeData:
    # minutes since midnight
    start_time: int
    end_time: int


@dataclass(frozen=True)
class CourseAreaData:
    area: Optional[str]


@dataclass(frozen=True)
class CampusData:
    campus: str


FilterData = Union[TextData, ScheduleDaysData, MeetingTimeData, CourseAreaData, CampusData]


@dataclass(frozen=True)
class Filter:
    key: FilterKey
    data: Optional[FilterData] = None


# ---------------------------------------------------------------------------
# Per-key checks
# ---------------------------------------------------------------------------


def _department(section: Section, data: TextData) -> bool:
    return data.text in section.identifier.department.lower()


def _title(section: Section, data: TextData) -> bool:
    return data.text.lower() in section.course.title.lower()


def _description(section: Section, data: TextData) -> bool:
    return data.text in section.course.description.lower()


def _course_code(section: Section, data: TextData) -> bool:
    tokens = tokenize(data.text)
    if len(tokens) > 3:
        return False

    ident = section.identifier

    # more tokens means more segments to check; each level also checks the ones below it
    if len(tokens) >= 3 and tokens[2] not in ident.suffix:
        return False
    if len(tokens) >= 2 and tokens[1] not in pad_number(ident.course_number, 3):
        return False
    if len(tokens) >= 1 and tokens[0] not in ident.department.lower():
        return False
    return True


def _instructor(section: Section, data: TextData) -> bool:
    return any(data.text in i.name.lower() for i in section.instructors)


def _always(section: Section, data: FilterData) -> bool:
    return True


_CHECKS: Dict[FilterKey, Callable[[Section, FilterData], bool]] = {
    FilterKey.DEPARTMENT: _department,
    FilterKey.TITLE: _title,
    FilterKey.CAMPUS: _always,
    FilterKey.DESCRIPTION: _description,
    FilterKey.COURSE_CODE: _course_code,
    FilterKey.INSTRUCTOR: _instructor,
    FilterKey.SCHEDULE_DAYS: _always,
    FilterKey.COURSE_AREA: _always,
    FilterKey.MEETING_TIME: _always,
}


def filter_section(section: Section, filters: Iterable[Filter]) -> bool:
    """
    True iff the section passes every filter that carries data.
    """
    for f in filters:
        if f.data is None:
            continue
        if not _CHECKS[f.key](section, f.data):
            return False
    return True


# ---------------------------------------------------------------------------
# Parsing filters from user input
# ---------------------------------------------------------------------------


def parse_filter_key(text: str) -> Optional[FilterKey]:
    """
    Return the filter keyword that ends `text`, if any.

        parse_filter_key("intro to dept") -> FilterKey.DEPARTMENT
    """
    m = FILTER_KEY_RE.search(text)
    if not m:
        return None
    return FilterKey(m.group(1).lower())


def _time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def _parse_data(key: FilterKey, value: str) -> FilterData:
    if key in TEXT_KEYS:
        return TextData(text=value)

    if key == FilterKey.SCHEDULE_DAYS:
        days = frozenset(value.upper())
        unknown = days - WEEKDAYS
        if unknown:
            raise ValueError(f"Unknown weekday(s): {''.join(sorted(unknown))}")
        return ScheduleDaysData(days=days)

    if key == FilterKey.MEETING_TIME:
        if "-" not in value:
            raise ValueError(f"Expected HH:MM-HH:MM, got {value!r}")
        start, end = value.split("-", 1)
        return MeetingTimeData(start_time=_time_to_minutes(start), end_time=_time_to_minutes(end))

    if key == FilterKey.COURSE_AREA:
        return CourseAreaData(area=value)

    return CampusData(campus=value.upper())


def parse_filter(expr: str) -> Filter:
    """
    Parse "key=value" (or "key:value") into a Filter.

    An empty value gives a filter without data, which matches everything.
    Raises ValueError for unknown keys or malformed values.
    """
    m = re.match(r"\s*([A-Za-z]+)\s*[=:](.*)$", expr)
    if not m:
        raise ValueError(f"Expected KEY=VALUE, got {expr!r}")

    raw_key, value = m.group(1).lower(), m.group(2).strip()
    try:
        key = FilterKey(raw_key)
    except ValueError:
        valid = ", ".join(k.value for k in FilterKey)
        raise ValueError(f"Unknown filter key {raw_key!r} (expected one of: {valid})") from None

    if not value:
        return Filter(key=key)

    f = Filter(key=key, data=_parse_data(key, value))
    logger.debug("parsed filter %s", f)
    return f


def parse_filters(exprs: Iterable[str]) -> List[Filter]:
    return [parse_filter(e) for e in exprs]
