from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

# Rendering used by the text accessors.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_UNPUBLISH_BACKDATE = timedelta(minutes=1)


@dataclass(frozen=True, slots=True)
class PublicationPolicy:
    """Defines what it means for a record to be published "as of" a moment.

    Semantics (intentionally centralized):
    - Published if (publish_at is None OR publish_at <= as_of)
      AND (unpublish_at is None OR unpublish_at > as_of)
    - Unpublished if (publish_at is not None AND publish_at > as_of)
      OR (unpublish_at is not None AND unpublish_at < as_of)

    Note: at as_of == unpublish_at neither rule matches. Both the in-memory
    checks and the SQL predicates keep that boundary.
    """

    as_of: datetime

    def is_published(
        self, *, publish_at: datetime | None, unpublish_at: datetime | None
    ) -> bool:
        return (publish_at is None or publish_at <= self.as_of) and (
            unpublish_at is None or unpublish_at > self.as_of
        )

    def is_unpublished(
        self, *, publish_at: datetime | None, unpublish_at: datetime | None
    ) -> bool:
        # Decomposed negation, mirrors sqlalchemy_unpublished_predicate.
        return (publish_at is not None and publish_at > self.as_of) or (
            unpublish_at is not None and unpublish_at < self.as_of
        )

    def sqlalchemy_published_predicate(self, *, publish_col, unpublish_col):
        """Build a SQLAlchemy predicate implementing the published rule.

        Kept here so repositories can translate the policy into SQL without
        redefining the boundary conditions.
        """
        from sqlalchemy import and_, or_

        return and_(
            or_(
                publish_col.is_(None),
                publish_col <= self.as_of,
            ),
            or_(
                unpublish_col.is_(None),
                unpublish_col > self.as_of,
            ),
        )

    def sqlalchemy_unpublished_predicate(self, *, publish_col, unpublish_col):
        """Build a SQLAlchemy predicate implementing the unpublished rule."""
        from sqlalchemy import and_, or_

        return or_(
            and_(
                publish_col.isnot(None),
                publish_col > self.as_of,
            ),
            and_(
                unpublish_col.isnot(None),
                unpublish_col < self.as_of,
            ),
        )


@dataclass(slots=True)
class PublicationWindow:
    """The publish_at / unpublish_at pair embedded in a publishable record.

    Either bound may be absent: no publish_at means "already visible", no
    unpublish_at means "never expires". No ordering is enforced between
    the two; an inverted window is simply never published.
    """

    publish_at: datetime | None = None
    unpublish_at: datetime | None = None

    def is_published(self, now: datetime) -> bool:
        return PublicationPolicy(as_of=now).is_published(
            publish_at=self.publish_at, unpublish_at=self.unpublish_at
        )

    def is_inverted(self) -> bool:
        return (
            self.publish_at is not None
            and self.unpublish_at is not None
            and self.unpublish_at < self.publish_at
        )

    def publish(self, now: datetime) -> bool:
        """Publish indefinitely from ``now``. Returns False if nothing changed."""
        if self.is_published(now):
            return False
        self.publish_at = now
        self.unpublish_at = None
        return True

    def unpublish(
        self, now: datetime, backdate: timedelta = DEFAULT_UNPUBLISH_BACKDATE
    ) -> bool:
        """Hide the record right away. Returns False if nothing changed.

        unpublish_at is set ``backdate`` before ``now`` so a read issued
        right after the write already sees the record as unpublished.
        """
        if backdate <= timedelta(0):
            raise ValueError("backdate must be positive so unpublish_at ends up before now")
        if not self.is_published(now):
            return False
        self.unpublish_at = now - backdate
        return True

    @staticmethod
    def published_filter_predicate(now: datetime) -> PublicationFilter:
        return PublicationFilter(policy=PublicationPolicy(as_of=now), published=True)

    @staticmethod
    def unpublished_filter_predicate(now: datetime) -> PublicationFilter:
        return PublicationFilter(policy=PublicationPolicy(as_of=now), published=False)


@dataclass(frozen=True, slots=True)
class PublicationFilter:
    """One side of the policy, in a form a query layer can translate.

    matches() is the in-memory side of the same description; as_sqlalchemy()
    is what repositories filter with.
    """

    policy: PublicationPolicy
    published: bool = True

    def matches(
        self, *, publish_at: datetime | None, unpublish_at: datetime | None
    ) -> bool:
        if self.published:
            return self.policy.is_published(
                publish_at=publish_at, unpublish_at=unpublish_at
            )
        return self.policy.is_unpublished(
            publish_at=publish_at, unpublish_at=unpublish_at
        )

    def as_sqlalchemy(self, *, publish_col, unpublish_col):
        if self.published:
            return self.policy.sqlalchemy_published_predicate(
                publish_col=publish_col, unpublish_col=unpublish_col
            )
        return self.policy.sqlalchemy_unpublished_predicate(
            publish_col=publish_col, unpublish_col=unpublish_col
        )


def published_only(now: datetime, published: bool | None = None) -> PublicationFilter:
    """Select the published or unpublished filter. None selects published."""
    if published is None:
        published = True
    return PublicationFilter(policy=PublicationPolicy(as_of=now), published=published)


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str | None) -> datetime | None:
    """Parse a human-entered timestamp.

    Blank input clears the value. Offset-aware input is converted to naive
    UTC, which is how timestamps are stored. Raises ValueError on malformed
    input.
    """
    if text is None or not text.strip():
        return None
    value = datetime.fromisoformat(text.strip())
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
