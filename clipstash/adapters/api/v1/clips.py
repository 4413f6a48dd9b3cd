"""Clip endpoints.

The routes only translate between HTTP and the domain: raw strings become
value objects, domain errors propagate to the global exception handlers, and
every successful read is reported to the hit counter.
"""

from typing import Annotated, Optional

import structlog
from fastapi import APIRouter, Cookie, Header, status

from clipstash.adapters.api.v1.schemas import (
    ClipResponse,
    MessageResponse,
    NewClipRequest,
    UpdateClipRequest,
)
from clipstash.adapters.api.v1.utils import parse_shortcode, supplied_password
from clipstash.domain.value_objects import Content, Expires, Password, Title
from clipstash.infrastructure.dependency_injection.clip_dependencies import (
    CleanClipService,
    CleanHitCounter,
    ValidApiKey,
)

logger = structlog.get_logger(__name__)
router = APIRouter()

PasswordCookie = Annotated[Optional[str], Cookie(alias="password")]
PasswordHeader = Annotated[Optional[str], Header(alias="x-clip-password")]


@router.post(
    "",
    response_model=ClipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a clip",
)
async def create_clip(
    payload: NewClipRequest,
    service: CleanClipService,
    api_key: ValidApiKey,
):
    """Store a new clip and return it with its generated short code."""
    clip = await service.create(
        content=Content(payload.content),
        title=Title(payload.title),
        password=Password(payload.password),
        expires=Expires.parse(payload.expires),
    )
    return ClipResponse.from_entity(clip)


@router.get("/{shortcode}", response_model=ClipResponse, summary="Fetch a clip")
async def get_clip(
    shortcode: str,
    service: CleanClipService,
    hit_counter: CleanHitCounter,
    api_key: ValidApiKey,
    password: PasswordCookie = None,
    x_clip_password: PasswordHeader = None,
):
    """Fetch a clip by short code.

    A protected clip needs its password, taken from the ``x-clip-password``
    header or the ``password`` cookie. Each successful fetch counts as one
    hit; the returned count may lag by one flush interval.
    """
    clip = await service.get(parse_shortcode(shortcode), supplied_password(x_clip_password, password))
    hit_counter.notify_hit(clip.shortcode, 1)
    return ClipResponse.from_entity(clip)


@router.put("/{shortcode}", response_model=ClipResponse, summary="Update a clip")
async def update_clip(
    shortcode: str,
    payload: UpdateClipRequest,
    service: CleanClipService,
    api_key: ValidApiKey,
    password: PasswordCookie = None,
    x_clip_password: PasswordHeader = None,
):
    """Replace a clip's content, title and expiry.

    The short code, id, creation time and hit count are kept.
    """
    clip = await service.update(
        parse_shortcode(shortcode),
        content=Content(payload.content),
        password=supplied_password(payload.password, x_clip_password, password),
        title=Title(payload.title),
        expires=Expires.parse(payload.expires),
        new_password=Password(payload.new_password) if payload.new_password else None,
    )
    return ClipResponse.from_entity(clip)


@router.delete("/{shortcode}", response_model=MessageResponse, summary="Delete a clip")
async def delete_clip(
    shortcode: str,
    service: CleanClipService,
    api_key: ValidApiKey,
    password: PasswordCookie = None,
    x_clip_password: PasswordHeader = None,
):
    code = parse_shortcode(shortcode)
    await service.delete(code, supplied_password(x_clip_password, password))
    return MessageResponse(message=f"clip {code} deleted")
