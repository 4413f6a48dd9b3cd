"""Plain-text clip endpoint.

Serves the bare clip content, e.g. for ``curl`` or ``<script src>``. Like the
clip page it is gated only by the clip password, read from the ``password``
cookie.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Cookie
from fastapi.responses import PlainTextResponse

from clipstash.adapters.api.v1.utils import parse_shortcode, supplied_password
from clipstash.infrastructure.dependency_injection.clip_dependencies import (
    CleanClipService,
    CleanHitCounter,
)

router = APIRouter()


@router.get("/{shortcode}", response_class=PlainTextResponse, summary="Fetch raw clip content")
async def get_raw_clip(
    shortcode: str,
    service: CleanClipService,
    hit_counter: CleanHitCounter,
    password: Annotated[Optional[str], Cookie()] = None,
):
    clip = await service.get(parse_shortcode(shortcode), supplied_password(password))
    hit_counter.notify_hit(clip.shortcode, 1)
    return PlainTextResponse(clip.content.as_str())
