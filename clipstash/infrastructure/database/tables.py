"""SQLModel table definitions for clips and API keys.

Timestamps are stored as naive UTC datetimes; the repository converts them to
and from aware values at the boundary.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, LargeBinary, String, Text, text
from sqlmodel import Column, Field, Index, SQLModel


class ClipRow(SQLModel, table=True):
    """Persistent representation of a `Clip`.

    Attributes:
        clip_id: UUID string, the storage-level identity.
        shortcode: Unique public lookup key.
        content: Clip body, never empty.
        title: Optional title.
        posted: Creation timestamp.
        expires: Optional expiry timestamp, indexed for the sweeper.
        password: Optional plain text password.
        hits: Recorded views, only raised by hit counter flushes.
    """

    __tablename__ = "clips"

    clip_id: str = Field(
        sa_column=Column(String(36), primary_key=True),
        description="Storage-level identity of the clip.",
    )
    shortcode: str = Field(
        sa_column=Column(String(64), unique=True, index=True, nullable=False),
        description="Public, URL-safe lookup key.",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Clip body.",
    )
    title: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )
    posted: datetime = Field(
        sa_column=Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    )
    expires: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
    )
    password: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )
    hits: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default=text("0")),
    )

    __table_args__ = (
        Index("ix_clips_expires", "expires"),  # Expiry sweep
        {"extend_existing": True},
    )


class ApiKeyRow(SQLModel, table=True):
    """An issued API key, stored as raw bytes."""

    __tablename__ = "api_keys"

    api_key: bytes = Field(
        sa_column=Column(LargeBinary(64), primary_key=True),
    )
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    )

    __table_args__ = ({"extend_existing": True},)
