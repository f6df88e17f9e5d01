"""Versions shared by plugins and project configuration files.

A version is a positive integer plus an optional stability stage. The same
value type is used for both flavors; they only differ in how they render:
project versions render as ``3`` or ``3-alpha`` while plugin versions render
as ``v4`` or ``v1-alpha``. Parsing accepts either form.
"""

import functools
import re
from dataclasses import dataclass

from .errors import (
    EmptyVersionError,
    InvalidStageError,
    MalformedNumberError,
    MalformedVersionError,
    NonPositiveNumberError,
)
from .stage import Stage

MIN_NUMBER = 1

_DIGITS_RE = re.compile(r"[0-9]+")


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """Project configuration version."""

    number: int
    stage: Stage = Stage.STABLE

    prefix = ""

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``[v]N[-alpha|-beta]``.

        Raises:
            MalformedVersionError: one of its subclasses, describing which
                part of the string is invalid.
        """
        if not text:
            raise EmptyVersionError()

        body = text[1:] if text.startswith("v") else text
        number_part, sep, stage_part = body.partition("-")

        if not _DIGITS_RE.fullmatch(number_part):
            raise MalformedNumberError(text)
        number = int(number_part)
        if number < MIN_NUMBER:
            raise NonPositiveNumberError(text)

        stage = Stage.STABLE
        if sep:
            try:
                stage = Stage.parse(stage_part)
            except InvalidStageError:
                raise InvalidStageError(text, stage_part) from None
            if stage is Stage.STABLE:
                # "1-" carries an empty stage suffix
                raise InvalidStageError(text, stage_part)

        return cls(number, stage)

    def validate(self) -> None:
        """Check the invariants of a version built without ``parse``."""
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise MalformedNumberError(repr(self.number))
        if self.number < MIN_NUMBER:
            raise NonPositiveNumberError(str(self.number))
        if not isinstance(self.stage, Stage):
            raise InvalidStageError(str(self.number), str(self.stage))

    def is_valid(self) -> bool:
        try:
            self.validate()
        except MalformedVersionError:
            return False
        return True

    def is_stable(self) -> bool:
        return self.stage is Stage.STABLE

    def compare(self, other: "Version") -> int:
        """Return -1 if self < other, 0 if equal and 1 if self > other.

        Numbers are compared first; on a tie the more stable stage wins.
        """
        if self.number != other.number:
            return 1 if self.number > other.number else -1
        return self.stage.compare(other.stage)

    def __str__(self) -> str:
        if self.stage is Stage.STABLE:
            return f"{self.prefix}{self.number}"
        return f"{self.prefix}{self.number}-{self.stage}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.number, self.stage.value))


class PluginVersion(Version):
    """Plugin version, rendered with a leading ``v``."""

    prefix = "v"
