"""
Database model mixins for publishable records.
"""
from sqlalchemy import Column, DateTime

from app.domain.publication_window import (
    PublicationWindow,
    format_timestamp,
    parse_timestamp,
)

INVALID = "is invalid"


class PublishableMixin:
    """
    Mixin for records shown or hidden by a publication window.

    Adds publish_at and unpublish_at columns. Both are optional and have no
    constraints between them; the rules that interpret them live in
    PublicationWindow / PublicationPolicy.

    The *_text accessors accept human-entered timestamps. A malformed value
    leaves the column untouched and flags the field; the flags are reported
    by publication_errors() and must be checked before saving.
    """

    publish_at = Column(DateTime, nullable=True, index=True)
    unpublish_at = Column(DateTime, nullable=True, index=True)

    @property
    def publication_window(self) -> PublicationWindow:
        return PublicationWindow(
            publish_at=self.publish_at, unpublish_at=self.unpublish_at
        )

    @publication_window.setter
    def publication_window(self, window: PublicationWindow) -> None:
        self.publish_at = window.publish_at
        self.unpublish_at = window.unpublish_at

    @property
    def publish_at_text(self) -> str | None:
        return format_timestamp(self.publish_at)

    @publish_at_text.setter
    def publish_at_text(self, text: str | None) -> None:
        self._assign_text("publish_at", text)

    @property
    def unpublish_at_text(self) -> str | None:
        return format_timestamp(self.unpublish_at)

    @unpublish_at_text.setter
    def unpublish_at_text(self, text: str | None) -> None:
        self._assign_text("unpublish_at", text)

    def _invalid_publication_fields(self) -> set[str]:
        # Not mapped; instances loaded from the database start without it.
        fields = getattr(self, "_publication_invalid_fields", None)
        if fields is None:
            fields = set()
            self._publication_invalid_fields = fields
        return fields

    def _assign_text(self, field: str, text: str | None) -> None:
        try:
            value = parse_timestamp(text)
        except ValueError:
            self._invalid_publication_fields().add(field)
            return
        self._invalid_publication_fields().discard(field)
        setattr(self, field, value)

    def publication_errors(self) -> dict[str, str]:
        """Field-keyed messages for text input that could not be parsed."""
        invalid = self._invalid_publication_fields()
        return {
            field: INVALID
            for field in ("publish_at", "unpublish_at")
            if field in invalid
        }

    def clear_publication_errors(self) -> None:
        self._invalid_publication_fields().clear()
