"""
Tests for department routing.
"""

import pytest

from newslens.core.categorizer import categorize, score_department
from newslens.errors import NotFoundError
from newslens.models import Article, Department
from newslens.services.categorization import categorize_article


TITLE = "Metro line extended to city hospital"
CONTENT = "The metro railway extension connects the hospital district."


def test_title_matches_score_three_and_body_matches_one(departments):
    transport = departments[0]
    match = score_department(transport, TITLE.lower(), f"{TITLE} {CONTENT}".lower())

    assert match.score == 4
    assert match.matched_keywords == ["metro", "railway"]


def test_primary_and_next_two_related(departments):
    result = categorize(departments, TITLE, CONTENT)

    assert result.primary.short_name == "URB"
    assert [dept.short_name for dept in result.related] == ["TRN", "HLT"]
    assert [match.score for match in result.matches] == [6, 4, 3]


def test_departments_without_matches_are_dropped(departments):
    result = categorize(departments, TITLE, CONTENT)

    assert "EDU" not in [match.department.short_name for match in result.matches]


def test_no_match_gives_no_primary(departments):
    result = categorize(departments, "Weather update", "Light rain expected")

    assert result.primary is None
    assert result.related == []


def test_is_deterministic(departments):
    first = categorize(departments, TITLE, CONTENT)
    second = categorize(departments, TITLE, CONTENT)

    assert first.primary.id == second.primary.id
    assert [d.id for d in first.related] == [d.id for d in second.related]


def test_tolerates_missing_text(departments):
    assert categorize(departments, None, None).primary is None


def test_assignment_is_saved_on_article(memory_repo, departments):
    for department in departments:
        memory_repo.add_department(department)
    article = memory_repo.insert_article(Article(title=TITLE, content=CONTENT, url="https://x.org/a"))

    categorize_article(memory_repo, TITLE, CONTENT, article.id)
    stored = memory_repo.get_article(article.id)

    by_short_name = {dept.short_name: dept.id for dept in departments}
    assert stored.primary_department_id == by_short_name["URB"]
    assert stored.related_departments == [by_short_name["TRN"], by_short_name["HLT"]]


def test_unknown_article_raises(memory_repo, departments):
    with pytest.raises(NotFoundError):
        categorize_article(memory_repo, TITLE, CONTENT, "missing")


def test_keyword_spanning_title_and_body_matches_once():
    water = Department(name="Water Supply", short_name="WTR", keywords=["water supply"])

    result = categorize([water], "Residents demand clean water", "Supply cuts continue in the old town.")

    assert result.primary is water
    assert result.matches[0].score == 1
    assert result.matches[0].matched_keywords == ["water supply"]
