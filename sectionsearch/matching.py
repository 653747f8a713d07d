"""
Free-text relevance ranking.

A query is matched against a section along eight categories. Each category
has a weight that is a distinct power of two (code highest, campus lowest).
An exact hit counts 256x its weight, a fuzzy hit counts its weight once, so
a single exact hit in any category beats every possible combination of fuzzy
hits (256 > 128+64+...+1).

Example: for the query "rust" we want the RUST department first, then
sections with "rust" in the title, then anything taught by someone named
Rusty, and last the sections that only mention it in the description.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence

from sectionsearch.filters import Filter, filter_section
from sectionsearch.model import Section, code_segments, stringify_section_code
from sectionsearch.tokens import tokenize

logger = logging.getLogger(__name__)


class MatchCategory(IntEnum):
    # the value is the category weight
    CODE = 1 << 7
    TITLE = 1 << 6
    DEPARTMENT = 1 << 5
    NUMBER = 1 << 4
    INSTRUCTOR = 1 << 3
    DESCRIPTION = 1 << 2
    COURSE_AREA = 1 << 1
    CAMPUS = 1 << 0


EXACT_MATCH_THRESHOLD = 1 << 8

# score for the empty query: everything matches, all equally
EMPTY_QUERY_SCORE = 1


@dataclass(frozen=True)
class Match:
    category: MatchCategory
    is_exact: bool


def compute_match_score(matches: Sequence[Match]) -> Optional[int]:
    """
    Sum of category weights, exact hits multiplied by EXACT_MATCH_THRESHOLD.

    Returns None when there is no match at all.
    """
    if not matches:
        return None
    return sum(m.category * (EXACT_MATCH_THRESHOLD if m.is_exact else 1) for m in matches)


def _parse_int(token: str) -> Optional[int]:
    try:
        return int(token, 10)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Per-category matchers
# ---------------------------------------------------------------------------


def _match_code(section: Section, query: str, tokens: List[str]) -> List[Match]:
    code = stringify_section_code(section.identifier).lower()
    if code.startswith(" ".join(tokens)) or code.startswith(query):
        return [Match(MatchCategory.CODE, True)]

    # token i has to appear in code segment i
    segments = [s.lower() for s in code_segments(section.identifier)]
    if len(segments) < len(tokens):
        return []
    if all(t in segments[i] for i, t in enumerate(tokens)):
        return [Match(MatchCategory.CODE, False)]
    return []


def _match_title(section: Section, query: str, tokens: List[str]) -> List[Match]:
    title = section.course.title.lower()
    if title == query:
        return [Match(MatchCategory.TITLE, True)]
    if query in title:
        return [Match(MatchCategory.TITLE, False)]

    fragments = title.split(" ")
    for t in tokens:
        if t in fragments:
            return [Match(MatchCategory.TITLE, False)]
    return []


def _match_department(section: Section, query: str, tokens: List[str]) -> List[Match]:
    dept = section.identifier.department.lower()

    # only the first token can be an exact hit: "lit intro" should rank LIT
    # sections first, "intro to lit" should not flood results with LIT
    if tokens and tokens[0] == dept:
        return [Match(MatchCategory.DEPARTMENT, True)]
    if any(t in dept for t in tokens):
        return [Match(MatchCategory.DEPARTMENT, False)]
    return []


def _match_number(section: Section, query: str, tokens: List[str]) -> List[Match]:
    number = section.identifier.course_number
    for t in tokens[:2]:
        if _parse_int(t) == number:
            return [Match(MatchCategory.NUMBER, True)]

    number_str = str(number)
    if any(t in number_str for t in tokens):
        return [Match(MatchCategory.NUMBER, False)]
    return []


def _match_instructor(section: Section, query: str, tokens: List[str]) -> List[Match]:
    names = [i.name.lower() for i in section.instructors]
    if query in names:
        return [Match(MatchCategory.INSTRUCTOR, True)]

    # one fuzzy hit per matching instructor
    return [Match(MatchCategory.INSTRUCTOR, False) for name in names if query in name]


def _match_description(section: Section, query: str, tokens: List[str]) -> List[Match]:
    description = section.course.description.lower()
    if description == query:
        return [Match(MatchCategory.DESCRIPTION, True)]

    # one fuzzy hit per token found in the description
    return [Match(MatchCategory.DESCRIPTION, False) for t in tokens if t in description]


def _match_nothing(section: Section, query: str, tokens: List[str]) -> List[Match]:
    # TODO: match course areas against the area descriptions once the data file ships them
    return []


_MATCHERS = {
    MatchCategory.CODE: _match_code,
    MatchCategory.TITLE: _match_title,
    MatchCategory.DEPARTMENT: _match_department,
    MatchCategory.NUMBER: _match_number,
    MatchCategory.INSTRUCTOR: _match_instructor,
    MatchCategory.DESCRIPTION: _match_description,
    MatchCategory.COURSE_AREA: _match_nothing,
    MatchCategory.CAMPUS: _match_nothing,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_matches(text: str, section: Section) -> List[Match]:
    """
    All matches of a (non-empty) query against a section, highest category first.
    """
    query = text.lower()
    tokens = tokenize(query)

    matches: List[Match] = []
    for category in MatchCategory:
        matches.extend(_MATCHERS[category](section, query, tokens))
    return matches


def matches_text(text: str, section: Section) -> Optional[int]:
    """
    Relevance score of a section for a free-text query, or None if it does not match.

    The empty query matches every section with EMPTY_QUERY_SCORE.
    """
    if text == "":
        return EMPTY_QUERY_SCORE
    return compute_match_score(find_matches(text, section))


def search_sections(
    sections: Iterable[Section],
    text: str = "",
    filters: Sequence[Filter] = (),
) -> List[Section]:
    """
    Narrow sections with the structured filters, then rank them by the query.

    Sections without any match are dropped. Sections with equal scores keep
    their input order.
    """
    candidates = list(sections)
    if filters:
        candidates = [s for s in candidates if filter_section(s, filters)]
    logger.debug("%d sections left after %d filter(s)", len(candidates), len(filters))

    if text == "":
        return candidates

    scored = []
    for s in candidates:
        score = matches_text(text, s)
        if score is not None:
            scored.append((score, s))

    scored.sort(key=lambda pair: pair[0], reverse=True)
    logger.debug("%d sections match %r", len(scored), text)
    return [s for _, s in scored]
