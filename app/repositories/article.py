from datetime import datetime

from sqlalchemy.orm import Query, Session

from app.db.models.article import Article as ArticleModel
from app.domain.publication_window import PublicationWindow, published_only
from app.errors import NotFoundError


def get_article_by_id(db: Session, article_id: int) -> ArticleModel | None:
    """Get an article by ID."""
    return db.query(ArticleModel).filter(ArticleModel.id == article_id).first()


def get_all_articles(db: Session) -> list[ArticleModel]:
    """Get all articles, regardless of publication state."""
    return db.query(ArticleModel).all()


def filter_published_only(
    query: Query, now: datetime, published: bool | None = None
) -> Query:
    """
    Limit a query to published (default) or unpublished articles.

    The definition of "published" is a domain rule centralized in
    PublicationPolicy; passing published=None selects the published side.
    """
    publication_filter = published_only(now, published)
    return query.filter(
        publication_filter.as_sqlalchemy(
            publish_col=ArticleModel.publish_at,
            unpublish_col=ArticleModel.unpublish_at,
        )
    )


def get_published_articles(db: Session, now: datetime) -> list[ArticleModel]:
    """Get all articles visible at ``now``."""
    predicate = PublicationWindow.published_filter_predicate(now)
    return (
        db.query(ArticleModel)
        .filter(
            predicate.as_sqlalchemy(
                publish_col=ArticleModel.publish_at,
                unpublish_col=ArticleModel.unpublish_at,
            )
        )
        .order_by(ArticleModel.id)
        .all()
    )


def get_unpublished_articles(db: Session, now: datetime) -> list[ArticleModel]:
    """Get all articles hidden at ``now``."""
    predicate = PublicationWindow.unpublished_filter_predicate(now)
    return (
        db.query(ArticleModel)
        .filter(
            predicate.as_sqlalchemy(
                publish_col=ArticleModel.publish_at,
                unpublish_col=ArticleModel.unpublish_at,
            )
        )
        .order_by(ArticleModel.id)
        .all()
    )


def create_article(
    db: Session,
    title: str,
    created_at: datetime,
    body: str | None = None,
    publish_at: datetime | None = None,
    unpublish_at: datetime | None = None,
) -> ArticleModel:
    """Create a new article in the database. Pure data access - no business logic."""
    db_article = ArticleModel(
        title=title,
        body=body,
        created_at=created_at,
        publish_at=publish_at,
        unpublish_at=unpublish_at,
    )
    db.add(db_article)
    db.commit()
    db.refresh(db_article)
    return db_article


def save_article(db: Session, article: ArticleModel) -> ArticleModel:
    """Persist pending changes on an article. Errors propagate to the caller."""
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def update_article(
    db: Session,
    article_id: int,
    **kwargs,
) -> ArticleModel:
    """
    Update an article. Only updates fields that are explicitly provided.

    To clear a field (set to None), explicitly pass it with None value.
    Fields not provided are not updated.
    """
    article = get_article_by_id(db, article_id)
    if not article:
        raise NotFoundError("Article not found")

    if "title" in kwargs:
        article.title = kwargs["title"]
    if "body" in kwargs:
        article.body = kwargs["body"]  # Can be None to clear
    if "publish_at" in kwargs:
        article.publish_at = kwargs["publish_at"]  # Can be None to clear
    if "unpublish_at" in kwargs:
        article.unpublish_at = kwargs["unpublish_at"]  # Can be None to clear

    db.commit()
    db.refresh(article)
    return article


def get_all_articles_paginated(
    db: Session,
    now: datetime,
    page: int = 1,
    page_size: int = 100,
    published: bool | None = None,
) -> tuple[list[ArticleModel], int]:
    """
    Get articles with pagination, filtered by publication state.

    Args:
        now: Reference time the publication state is evaluated at
        page: Page number (1-indexed)
        page_size: Number of items per page
        published: True for published, False for unpublished. None (the
                   default) behaves like True.

    Returns:
        Tuple of (list of articles, total count)
    """
    query = filter_published_only(db.query(ArticleModel), now, published)

    total = query.count()
    skip = (page - 1) * page_size
    articles = (
        query.order_by(ArticleModel.created_at.desc(), ArticleModel.id.desc())
        .offset(skip)
        .limit(page_size)
        .all()
    )
    return articles, total


def delete_article(db: Session, article_id: int) -> None:
    """Delete an article from the database. Pure data access - no business logic."""
    article = get_article_by_id(db, article_id)
    if not article:
        raise NotFoundError("Article not found")

    db.delete(article)
    db.commit()
