from .clip_repository import ClipRepository
from .in_memory_clip_repository import InMemoryClipRepository

__all__ = ["ClipRepository", "InMemoryClipRepository"]
