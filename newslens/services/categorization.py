"""
Department assignment for stored articles.
"""
from __future__ import annotations

import logging
from typing import Optional

from newslens.core.categorizer import CategorizationResult, categorize
from newslens.errors import NotFoundError
from newslens.storage.base import Repository

logger = logging.getLogger(__name__)


def categorize_article(
    repository: Repository,
    title,
    content,
    article_id: Optional[str] = None,
) -> CategorizationResult:
    """
    Categorize an article against all departments.

    When `article_id` is given, the primary department id and the related
    department ids are saved on the article.

    Raises:
        NotFoundError: If `article_id` does not exist
    """
    result = categorize(repository.list_departments(), title, content)

    if article_id:
        article = repository.get_article(article_id)
        if article is None:
            raise NotFoundError(f"Article {article_id} not found")
        article.primary_department_id = result.primary.id if result.primary else None
        article.related_departments = [dept.id for dept in result.related]
        repository.update_article(article)
        logger.info(
            "Article %s assigned to %s",
            article_id, result.primary.short_name if result.primary else "no department",
        )

    return result
