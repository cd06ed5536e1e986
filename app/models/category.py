"""Category database models using SQLModel."""

from datetime import datetime
from typing import cast

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

from app.utils.helpers import utc_now


class PostCategoryLink(SQLModel, table=True):
    """Association between posts and categories."""

    __tablename__ = cast("declared_attr[str]", "post_categories")

    post_id: int = Field(
        sa_column=Column(
            "post_id",
            Integer,
            ForeignKey("posts.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    category_id: int = Field(
        sa_column=Column(
            "category_id",
            Integer,
            ForeignKey("categories.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )


class CategoryDB(SQLModel, table=True):
    """Post category."""

    __tablename__ = cast("declared_attr[str]", "categories")

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column(String(100), unique=True, nullable=False))
    slug: str = Field(sa_column=Column(String(100), unique=True, nullable=False, index=True))
    description: str | None = Field(default=None, sa_column=Column(String(500)))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
