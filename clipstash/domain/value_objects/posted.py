"""Creation timestamp value object."""

from dataclasses import dataclass
from datetime import datetime, timezone

from clipstash.domain.value_objects.expires import as_utc


@dataclass(frozen=True, slots=True)
class Posted:
    """The moment a clip was created. Set once and never changed."""

    value: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.value, datetime):
            raise TypeError("Posted value must be a datetime.")
        object.__setattr__(self, "value", as_utc(self.value))

    @classmethod
    def now(cls) -> "Posted":
        return cls(datetime.now(timezone.utc))
