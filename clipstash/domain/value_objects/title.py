"""Title value object."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Title:
    """Optional clip title.

    Empty or whitespace-only input normalizes to "no title". This is a
    normalization rule, not an error.
    """

    value: Optional[str] = None

    def __post_init__(self) -> None:
        if self.value is not None and not self.value.strip():
            object.__setattr__(self, "value", None)

    @property
    def is_present(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        return self.value or ""
