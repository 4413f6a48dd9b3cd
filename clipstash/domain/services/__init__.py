from .clip_service import ClipService

__all__ = ["ClipService"]
