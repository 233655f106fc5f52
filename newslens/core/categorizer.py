"""
Keyword-based department routing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from newslens.core.text import coerce_text
from newslens.models import Department

TITLE_MATCH_POINTS = 3
CONTENT_MATCH_POINTS = 1
MAX_RELATED_DEPARTMENTS = 2


@dataclass
class DepartmentMatch:
    department: Department
    score: int
    matched_keywords: List[str] = field(default_factory=list)


@dataclass
class CategorizationResult:
    primary: Optional[Department]
    related: List[Department] = field(default_factory=list)
    matches: List[DepartmentMatch] = field(default_factory=list)


def score_department(department: Department, lower_title: str, lower_text: str) -> DepartmentMatch:
    """
    Score one department against an article.

    A keyword found in the title earns 3 points, otherwise 1 point if it is
    found anywhere in the joined "title content" text.
    """
    score = 0
    matched: List[str] = []
    for keyword in department.keywords:
        needle = keyword.lower().strip()
        if not needle:
            continue
        if needle in lower_title:
            score += TITLE_MATCH_POINTS
            matched.append(keyword)
        elif needle in lower_text:
            score += CONTENT_MATCH_POINTS
            matched.append(keyword)
    return DepartmentMatch(department=department, score=score, matched_keywords=matched)


def categorize(departments: Iterable[Department], title: object, content: object) -> CategorizationResult:
    """
    Rank departments by keyword score.

    Departments scoring zero are dropped. Ties keep the input order. The
    highest scorer is primary and the next two are related.
    """
    lower_title = coerce_text(title).lower()
    lower_text = f"{lower_title} {coerce_text(content).lower()}"

    matches = [score_department(dept, lower_title, lower_text) for dept in departments]
    matches = [match for match in matches if match.score > 0]
    matches.sort(key=lambda match: match.score, reverse=True)

    if not matches:
        return CategorizationResult(primary=None)
    return CategorizationResult(
        primary=matches[0].department,
        related=[match.department for match in matches[1:1 + MAX_RELATED_DEPARTMENTS]],
        matches=matches,
    )
