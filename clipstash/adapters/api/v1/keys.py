"""API key endpoints."""

import structlog
from fastapi import APIRouter, status

from clipstash.adapters.api.v1.schemas import ApiKeyResponse, MessageResponse
from clipstash.infrastructure.dependency_injection.clip_dependencies import (
    CleanClipService,
    ValidApiKey,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=ApiKeyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue an API key",
)
async def create_api_key(service: CleanClipService):
    """Issue a new API key. It is shown once, base64-encoded."""
    key = await service.generate_api_key()
    return ApiKeyResponse.from_key(key)


@router.delete("", response_model=MessageResponse, summary="Revoke the calling API key")
async def revoke_api_key(service: CleanClipService, api_key: ValidApiKey):
    await service.revoke_api_key(api_key)
    return MessageResponse(message="API key revoked")
