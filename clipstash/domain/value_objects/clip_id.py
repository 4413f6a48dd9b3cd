"""Internal clip identifier.

The `ClipId` is the storage-level identity of a clip and is distinct from the
public `ShortCode`. Before persistence it is the nil UUID.
"""

import uuid
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class ClipId:
    """Surrogate identifier of a stored clip.

    Attributes:
        value: UUID of the clip; ``uuid.UUID(int=0)`` until one is assigned.
    """

    value: uuid.UUID = field(default_factory=lambda: uuid.UUID(int=0))

    def __post_init__(self) -> None:
        if not isinstance(self.value, uuid.UUID):
            raise TypeError("ClipId value must be a UUID.")

    @classmethod
    def generate(cls) -> "ClipId":
        return cls(uuid.uuid4())

    @classmethod
    def parse(cls, raw: Union[str, uuid.UUID]) -> "ClipId":
        if isinstance(raw, uuid.UUID):
            return cls(raw)
        return cls(uuid.UUID(raw))

    @property
    def is_nil(self) -> bool:
        return self.value.int == 0

    def __str__(self) -> str:
        return str(self.value)
