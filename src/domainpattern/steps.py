"""Compiled pattern steps: literal labels and wildcards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = ["Static", "Wildcard", "Step"]


@dataclass(frozen=True)
class Static:
    """A literal segment that must equal the name segment exactly.

    Attributes:
        label: The literal text. ``str`` for text patterns, ``bytes`` for
            byte patterns, or a read-only ``memoryview`` into the source
            buffer when the pattern was compiled with ``borrow=True``.
    """

    label: str | bytes | memoryview

    @property
    def is_borrowed(self) -> bool:
        return isinstance(self.label, memoryview)

    def to_owned(self) -> Static:
        """Return a step holding an independent copy of the label."""
        if isinstance(self.label, memoryview):
            return Static(self.label.tobytes())
        return self


@dataclass(frozen=True)
class Wildcard:
    """A placeholder consuming whole segments.

    Attributes:
        multi: The wildcard may repeat over several segments.
        optional: The wildcard may consume no segment at all.
    """

    multi: bool
    optional: bool

    @property
    def token(self) -> str:
        """The shorthand this wildcard is written as."""
        if self.multi:
            return "**" if self.optional else "**+"
        return "*" if self.optional else "+"


Step = Union[Static, Wildcard]
