from enum import Enum

from .errors import ValidationError


class Rating(str, Enum):
    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(r.value for r in cls)
            raise ValidationError(f"Unknown rating {value!r}; expected one of: {allowed}") from None


# 4 ratings onto the 0-5 SM-2 scale; qualities 1 and 3 are never produced
QUALITY = {
    Rating.AGAIN: 0,
    Rating.HARD: 2,
    Rating.GOOD: 4,
    Rating.EASY: 5,
}
