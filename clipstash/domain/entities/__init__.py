from .clip import Clip

__all__ = ["Clip"]
