"""Stability stages for plugin and project versions."""

from enum import Enum

from .errors import InvalidStageError

ALPHA = "alpha"
BETA = "beta"


class Stage(Enum):
    """Version stage, ordered by decreasing stability.

    The integer values only encode declaration order; use ``compare`` for
    stability ordering, where a more stable stage is greater.
    """

    STABLE = 0
    BETA = 1
    ALPHA = 2

    def __str__(self) -> str:
        return _STAGE_STRINGS[self]

    @classmethod
    def parse(cls, text: str) -> "Stage":
        """Parse a stage suffix. The empty string is the stable stage."""
        try:
            return _STRING_STAGES[text]
        except KeyError:
            raise InvalidStageError(text, text) from None

    def compare(self, other: "Stage") -> int:
        """Return -1, 0 or 1; stable > beta > alpha."""
        if self == other:
            return 0
        # Lower declaration value means more stable.
        return 1 if self.value < other.value else -1


_STAGE_STRINGS = {
    Stage.STABLE: "",
    Stage.BETA: BETA,
    Stage.ALPHA: ALPHA,
}

_STRING_STAGES = {text: stage for stage, text in _STAGE_STRINGS.items()}
