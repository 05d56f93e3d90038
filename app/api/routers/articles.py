from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_now
from app.services.article import (
    create_article,
    delete_article,
    publish_article,
    unpublish_article,
    update_article,
)
import app.repositories.article as article_repo
from app.db.models.article import Article as ArticleModel
from app.schemas.article import Article, ArticleCreate, ArticleUpdate
from app.schemas.pagination import PaginatedResponse
from app.errors import NotFoundError

router = APIRouter(prefix="/articles", tags=["articles"])


def _to_schema(article: ArticleModel, now: datetime) -> Article:
    """Serialize an article with its publication state evaluated at ``now``."""
    data = Article.model_validate(article)
    data.is_published = article.publication_window.is_published(now)
    return data


@router.post("", response_model=Article, status_code=status.HTTP_201_CREATED)
def create_new_article(
    article_data: ArticleCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Create a new article.

    publish_at and unpublish_at are accepted as text; malformed values are
    rejected with a field-level "is invalid" error.
    """
    article = create_article(
        db,
        title=article_data.title,
        body=article_data.body,
        now=now,
        publish_at_text=article_data.publish_at,
        unpublish_at_text=article_data.unpublish_at,
    )
    return _to_schema(article, now)


@router.get("", response_model=PaginatedResponse[Article])
def get_all_articles(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(100, ge=1, le=1000, description="Number of items per page"),
    published: bool | None = Query(
        None,
        description="True for published, False for unpublished articles (default: published)",
    ),
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Get articles with pagination, filtered by publication state.
    """
    articles, total = article_repo.get_all_articles_paginated(
        db,
        now=now,
        page=page,
        page_size=page_size,
        published=published,
    )

    return PaginatedResponse(
        items=[_to_schema(article, now) for article in articles],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/published", response_model=list[Article])
def get_published_articles(
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Get all articles that are currently published."""
    articles = article_repo.get_published_articles(db, now)
    return [_to_schema(article, now) for article in articles]


@router.get("/unpublished", response_model=list[Article])
def get_unpublished_articles(
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """Get all articles that are currently unpublished."""
    articles = article_repo.get_unpublished_articles(db, now)
    return [_to_schema(article, now) for article in articles]


@router.get("/{article_id}", response_model=Article)
def get_article_by_id(
    article_id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Get an article by ID, whatever its publication state.
    """
    article = article_repo.get_article_by_id(db, article_id)
    if not article:
        raise NotFoundError("Article not found")
    return _to_schema(article, now)


@router.put("/{article_id}", response_model=Article)
def update_article_by_id(
    article_id: int,
    article_data: ArticleUpdate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Update an article.

    Fields not included in the request are not updated.
    To clear a field (set to null), explicitly include it with null value.
    """
    update_data = article_data.model_dump(exclude_unset=True)
    article = update_article(db, article_id=article_id, **update_data)
    return _to_schema(article, now)


@router.post("/{article_id}/publish", response_model=Article)
def publish_article_by_id(
    article_id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Publish an article from now on, without an end date.
    Publishing an already published article changes nothing.
    """
    article = publish_article(db, article_id, now)
    return _to_schema(article, now)


@router.post("/{article_id}/unpublish", response_model=Article)
def unpublish_article_by_id(
    article_id: int,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Unpublish an article immediately.
    Unpublishing an already unpublished article changes nothing.
    """
    article = unpublish_article(db, article_id, now)
    return _to_schema(article, now)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_article_by_id(
    article_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete an article by ID.
    """
    delete_article(db, article_id)
