"""
Central data model definitions used across the project.

This module defines the canonical structure of Section objects so that:
- the search engine, the filters and the CLI share the same field names
- records coming from the JSON data file are validated in one place

Sections are treated as read-only: nothing in the search engine mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class SectionIdentifier:
    """
    Identifies one section, e.g. CSCI 005 HM-01.
    """

    department: str
    course_number: int
    suffix: str
    affiliation: str
    section_number: int


@dataclass(frozen=True)
class Course:
    """
    The course a section belongs to.
    """

    title: str
    description: str
    primary_association: str
    course_areas: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Instructor:
    name: str


@dataclass(frozen=True)
class Section:
    """
    One scheduled offering of a course.
    """

    identifier: SectionIdentifier
    course: Course
    instructors: List[Instructor] = field(default_factory=list)


def pad_number(number: int, width: int) -> str:
    # left-pad with zeros, e.g. 5 -> "005"
    return str(number).rjust(width, "0")


def stringify_section_code(identifier: SectionIdentifier) -> str:
    """
    Render the canonical section code, e.g. "CSCI 005 HM-01".

    Empty suffix/affiliation are left out together with their separator.
    """
    code = f"{identifier.department} {pad_number(identifier.course_number, 3)}{identifier.suffix}"
    if identifier.affiliation:
        code += f" {identifier.affiliation}"
    return f"{code}-{pad_number(identifier.section_number, 2)}"


def code_segments(identifier: SectionIdentifier) -> List[str]:
    """
    Positional segments of the section code, empty ones removed.
    """
    segments = [
        identifier.department,
        pad_number(identifier.course_number, 3),
        identifier.suffix,
        identifier.affiliation,
        pad_number(identifier.section_number, 2),
    ]
    return [s for s in segments if s]


def _str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def section_from_dict(data: Dict[str, Any]) -> Section:
    """
    Build a Section from its JSON shape:

        {
          "identifier": {"department": "CSCI", "courseNumber": 5, "suffix": "",
                         "affiliation": "HM", "sectionNumber": 1},
          "course": {"title": ..., "description": ...,
                     "primaryAssociation": "HM", "courseAreas": [...]},
          "instructors": [{"name": ...}, ...]
        }

    Raises KeyError/TypeError/ValueError for records that do not have this shape.
    """
    ident = data["identifier"]
    course = data["course"]

    identifier = SectionIdentifier(
        department=_str(ident, "department"),
        course_number=int(ident["courseNumber"]),
        suffix=_str(ident, "suffix"),
        affiliation=_str(ident, "affiliation"),
        section_number=int(ident.get("sectionNumber") or 0),
    )

    areas = course.get("courseAreas") or []
    parent = Course(
        title=_str(course, "title"),
        description=_str(course, "description"),
        primary_association=_str(course, "primaryAssociation"),
        course_areas=[str(a) for a in areas],
    )

    instructors = [Instructor(name=_str(i, "name")) for i in data.get("instructors") or []]

    return Section(identifier=identifier, course=parent, instructors=instructors)
