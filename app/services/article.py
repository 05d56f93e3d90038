"""Article service: publication-aware create/update and the publish/unpublish transitions."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

import app.repositories.article as article_repo
from app.core.config import settings
from app.db.models.article import Article as ArticleModel
from app.errors import DomainValidationError, NotFoundError

logger = logging.getLogger(__name__)


def _validate_publication(article: ArticleModel, reject_inverted: bool) -> None:
    """
    Raise DomainValidationError if the article's publication dates can't be saved.

    - Text input that failed to parse is reported per field ("is invalid")
    - Inverted windows (unpublish_at before publish_at) are only rejected
      when reject_inverted is set; otherwise they are legal and never published
    """
    errors = article.publication_errors()
    if errors:
        logger.warning("Rejected article publication dates: %s", errors)
        raise DomainValidationError("Invalid publication dates", field_errors=errors)

    if reject_inverted and article.publication_window.is_inverted():
        errors = {"unpublish_at": "must not precede publish_at"}
        logger.warning("Rejected inverted publication window: %s", errors)
        raise DomainValidationError(
            f"Unpublish date ({article.unpublish_at}) cannot precede publish date ({article.publish_at})",
            field_errors=errors,
        )


def set_default_publication_date(db: Session, article: ArticleModel) -> ArticleModel:
    """
    Creation hook for the publish-by-default policy.

    Runs right after the first save: an article created without publish_at
    is published from its creation time.
    """
    if article.publish_at is not None:
        return article
    article.publish_at = article.created_at
    logger.info("Article %s published by default at %s", article.id, article.created_at)
    return article_repo.save_article(db, article)


def create_article(
    db: Session,
    title: str,
    now: datetime,
    body: str | None = None,
    publish_at_text: str | None = None,
    unpublish_at_text: str | None = None,
    publish_by_default: bool | None = None,
    reject_inverted: bool | None = None,
) -> ArticleModel:
    """
    Create a new article with publication validation.

    - Parses publish_at/unpublish_at from text; unparseable values are
      reported as field errors instead of raising from the parser
    - Uses ``now`` as the creation timestamp
    - Applies the publish-by-default creation hook when enabled
    """
    if publish_by_default is None:
        publish_by_default = settings.publish_by_default
    if reject_inverted is None:
        reject_inverted = settings.reject_inverted_windows

    draft = ArticleModel(title=title, body=body, created_at=now)
    draft.publish_at_text = publish_at_text
    draft.unpublish_at_text = unpublish_at_text
    _validate_publication(draft, reject_inverted)

    article = article_repo.create_article(
        db,
        title=title,
        body=body,
        created_at=now,
        publish_at=draft.publish_at,
        unpublish_at=draft.unpublish_at,
    )

    if publish_by_default:
        article = set_default_publication_date(db, article)
    return article


def update_article(
    db: Session,
    article_id: int,
    reject_inverted: bool | None = None,
    **update_fields,
) -> ArticleModel:
    """
    Update an article with publication validation.

    publish_at/unpublish_at are given as text and go through the same
    accessors as on create. Only fields explicitly provided are updated;
    an explicit None (or blank text) clears a publication date.
    """
    if reject_inverted is None:
        reject_inverted = settings.reject_inverted_windows

    article = article_repo.get_article_by_id(db, article_id)
    if not article:
        raise NotFoundError("Article not found")

    if "publish_at" in update_fields:
        article.publish_at_text = update_fields["publish_at"]
    if "unpublish_at" in update_fields:
        article.unpublish_at_text = update_fields["unpublish_at"]

    try:
        _validate_publication(article, reject_inverted)
    except DomainValidationError:
        # Drop the parsed half of a partially valid update.
        db.rollback()
        article.clear_publication_errors()
        raise

    update_dict = {}
    if update_fields.get("title") is not None:
        update_dict["title"] = update_fields["title"]
    if "body" in update_fields:
        update_dict["body"] = update_fields["body"]  # Can be None to clear
    if "publish_at" in update_fields:
        update_dict["publish_at"] = article.publish_at
    if "unpublish_at" in update_fields:
        update_dict["unpublish_at"] = article.unpublish_at

    return article_repo.update_article(db, article_id=article_id, **update_dict)


def publish_article(db: Session, article_id: int, now: datetime) -> ArticleModel:
    """
    Publish an article indefinitely from ``now`` and save it immediately.

    Already published articles are returned untouched, without a write.
    Persistence errors propagate to the caller.
    """
    article = article_repo.get_article_by_id(db, article_id)
    if not article:
        raise NotFoundError("Article not found")

    window = article.publication_window
    if not window.publish(now):
        return article

    article.publication_window = window
    logger.info("Article %s published at %s", article.id, now)
    return article_repo.save_article(db, article)


def unpublish_article(
    db: Session,
    article_id: int,
    now: datetime,
    backdate: timedelta | None = None,
) -> ArticleModel:
    """
    Unpublish an article right away and save it immediately.

    Already unpublished articles are returned untouched, without a write.
    Persistence errors propagate to the caller.
    """
    if backdate is None:
        backdate = settings.unpublish_backdate

    article = article_repo.get_article_by_id(db, article_id)
    if not article:
        raise NotFoundError("Article not found")

    window = article.publication_window
    if not window.unpublish(now, backdate):
        return article

    article.publication_window = window
    logger.info("Article %s unpublished as of %s", article.id, window.unpublish_at)
    return article_repo.save_article(db, article)


def delete_article(db: Session, article_id: int) -> None:
    """Delete an article."""
    article_repo.delete_article(db, article_id)
