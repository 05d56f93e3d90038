from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Article(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str | None = None
    created_at: datetime
    publish_at: datetime | None = None
    unpublish_at: datetime | None = None
    publish_at_text: str | None = None
    unpublish_at_text: str | None = None
    is_published: bool = False


class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str | None = None
    publish_at: str | None = Field(
        None, description="Publication date as text, e.g. 2006-05-23 08:00:00"
    )
    unpublish_at: str | None = Field(
        None, description="Unpublication date as text, e.g. 2006-05-24 09:00:00"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


class ArticleUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    body: str | None = None
    publish_at: str | None = None
    unpublish_at: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("title must not be blank")
        return v
