"""Compiled patterns and the cached ``match_pattern`` helper."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from domainpattern.engine import run
from domainpattern.steps import Static, Step

__all__ = ["CompiledPattern", "match_pattern"]


@dataclass(frozen=True)
class CompiledPattern:
    """An immutable, compiled hierarchical-label pattern.

    The first step corresponds to the leftmost label of a name. The same
    separator is used for the pattern's own tokens and for every name it is
    matched against, so ``"/"`` turns a domain matcher into a path matcher.

    Instances hold no mutable state and may be shared between threads; every
    call to :meth:`matches` works on its own scratch buffers.

    Usage::

        pattern = CompiledPattern.compile("**+.example.com")
        pattern.matches("api.example.com")  # True
        pattern.matches("example.com")  # False
    """

    steps: tuple[Step, ...]
    separator: str | bytes = "."

    @classmethod
    def compile(
        cls, pattern: str | bytes, separator: str | bytes = ".", *, borrow: bool = False
    ) -> CompiledPattern:
        """Compile ``pattern``; see :func:`domainpattern.compiler.compile_pattern`."""
        from domainpattern.compiler import compile_pattern

        return compile_pattern(pattern, separator, borrow=borrow)

    def matches(self, name: str | bytes) -> bool:
        """Return True if every label of ``name`` is consumed by the pattern."""
        return run(self.steps, self.separator, name)

    @property
    def is_borrowed(self) -> bool:
        """Whether any literal still references the source buffer."""
        return any(isinstance(step, Static) and step.is_borrowed for step in self.steps)

    def to_owned(self) -> CompiledPattern:
        """Return an equivalent pattern that no longer references its source.

        Patterns compiled with ``borrow=True`` hold ``memoryview`` slices of
        the original bytes and must not outlive them; the returned pattern
        copies each literal and matches exactly the same names.
        """
        return CompiledPattern(
            steps=tuple(
                step.to_owned() if isinstance(step, Static) else step
                for step in self.steps
            ),
            separator=self.separator,
        )

    def __str__(self) -> str:
        sep = self.separator
        if isinstance(sep, bytes):
            sep = sep.decode("latin-1")
        parts = []
        for step in self.steps:
            if isinstance(step, Static):
                label = step.label
                if isinstance(label, memoryview):
                    label = label.tobytes()
                if isinstance(label, bytes):
                    label = label.decode("utf-8", "backslashreplace")
                parts.append(label)
            else:
                parts.append(step.token)
        return sep.join(parts)


@lru_cache(maxsize=1024)
def _cached_compile(pattern: str | bytes, separator: str | bytes) -> CompiledPattern:
    return CompiledPattern.compile(pattern, separator)


def match_pattern(pattern: str | bytes, name: str | bytes, separator: str | bytes = ".") -> bool:
    """Match ``name`` against ``pattern`` without managing the compiled form.

    Compiled patterns are cached, so repeated calls with the same pattern
    only pay for matching.

    Args:
        pattern: The pattern to match against, e.g. ``"*.example.com"``.
        name: The concrete name to test.
        separator: The label separator for both pattern and name.

    Returns:
        True if the name matches the pattern, False otherwise.

    Raises:
        InvalidTokenError: If the pattern contains a malformed wildcard token.
    """
    return _cached_compile(pattern, separator).matches(name)
