from __future__ import annotations

"""Response Pydantic models for the clip API."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from clipstash.domain.entities.clip import Clip
from clipstash.domain.value_objects import ApiKey


class ClipResponse(BaseModel):
    """Serialised representation of :class:`~clipstash.domain.entities.clip.Clip`.

    The password is never included; ``has_password`` tells clients whether
    one is needed.
    """

    id: str
    shortcode: str
    content: str
    title: Optional[str] = None
    posted: datetime
    expires: Optional[datetime] = None
    hits: int = 0
    has_password: bool = False

    @classmethod
    def from_entity(cls, clip: Clip) -> "ClipResponse":
        return cls(**clip.to_public_dict())


class ApiKeyResponse(BaseModel):
    api_key: str

    @classmethod
    def from_key(cls, key: ApiKey) -> "ApiKeyResponse":
        return cls(api_key=key.to_base64())


class MessageResponse(BaseModel):
    """Simple envelope used for acknowledgments."""

    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HealthResponse(BaseModel):
    status: str
    env: str
    version: str
    services: Dict[str, Any]
    timestamp: datetime
