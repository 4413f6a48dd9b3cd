from __future__ import annotations

"""Request-payload Pydantic models for the clip API.

Fields arrive as plain strings. They are turned into domain value objects by
the routes, so the API and every other entry point share one set of
validation rules.
"""

from typing import Optional

from pydantic import BaseModel, Field


class NewClipRequest(BaseModel):
    """Payload expected by ``POST /clips``."""

    content: str = Field(..., examples=["print('hello')"])
    title: Optional[str] = Field(None, examples=["snippet"])
    password: Optional[str] = Field(None, description="Blank means unprotected")
    expires: Optional[str] = Field(
        None,
        examples=["2030-01-01", "2030-01-01T12:00:00Z"],
        description="Date or ISO-8601 timestamp, blank means never",
    )


class UpdateClipRequest(BaseModel):
    """Payload expected by ``PUT /clips/{shortcode}``."""

    content: str = Field(..., examples=["print('hello again')"])
    title: Optional[str] = None
    expires: Optional[str] = None
    password: Optional[str] = Field(None, description="Current password of a protected clip")
    new_password: Optional[str] = Field(None, description="Replacement password, blank keeps the current one")
