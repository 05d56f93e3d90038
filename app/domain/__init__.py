"""Domain-level policies and business rules.

This package contains logic that defines *what* the publication rules are,
independent from *where* they are applied (services, repositories, etc.).
"""

from app.domain.publication_window import (
    PublicationFilter,
    PublicationPolicy,
    PublicationWindow,
    published_only,
)

__all__ = ["PublicationFilter", "PublicationPolicy", "PublicationWindow", "published_only"]
