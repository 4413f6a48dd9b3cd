"""Clip API schemas package."""

# flake8: noqa: F401 - re-export

from .requests import NewClipRequest, UpdateClipRequest
from .responses import ApiKeyResponse, ClipResponse, HealthResponse, MessageResponse

__all__ = [
    "NewClipRequest",
    "UpdateClipRequest",
    "ClipResponse",
    "ApiKeyResponse",
    "MessageResponse",
    "HealthResponse",
]
