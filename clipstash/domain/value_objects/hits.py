"""Hit counter value object."""

from dataclasses import dataclass

from clipstash.core.exceptions import ClipError


@dataclass(frozen=True, slots=True)
class Hits:
    """Non-negative number of recorded views of a clip.

    Hits are only ever raised by the hit counter's flush; `increased` returns a
    new value and refuses to go backwards.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ClipError("hits must be an integer", ClipError.INVALID_HITS)
        if self.value < 0:
            raise ClipError("hits cannot be negative", ClipError.INVALID_HITS)

    def increased(self, delta: int) -> "Hits":
        if delta < 0:
            raise ClipError("hit delta cannot be negative", ClipError.INVALID_HITS)
        return Hits(self.value + delta)

    def __int__(self) -> int:
        return self.value
