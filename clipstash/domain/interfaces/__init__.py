from .repositories import IClipRepository, Transaction

__all__ = ["IClipRepository", "Transaction"]
