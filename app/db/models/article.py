from sqlalchemy import Column, DateTime, Integer, String, Text

from app.db.base import Base
from app.db.models.mixins import PublishableMixin


class Article(PublishableMixin, Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)
