"""Pattern acceptance policy applied before compilation.

The matching engine does not bound its own work. Long runs of adjacent
single-segment wildcards (``*.*.*.*``) multiply the number of live match
threads, so callers accepting patterns from untrusted sources should reject
such patterns up front with a :class:`PatternPolicy`.
"""

from __future__ import annotations

import logging
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.functional_validators import AfterValidator

from domainpattern.compiler import compile_pattern
from domainpattern.config import Config
from domainpattern.errors import ConfigError, PatternRejectedError
from domainpattern.pattern import CompiledPattern

__all__ = ["PatternPolicy"]

logger = logging.getLogger(__name__)

_SINGLE_SEGMENT_WILDCARDS = frozenset({"*", "+"})


def _check_separator(v: str) -> str:
    if len(v) != 1:
        raise ValueError("separator must be exactly one character")
    if v in ("*", "+"):
        raise ValueError("separator must not be a wildcard character")
    return v


Separator = Annotated[str, AfterValidator(_check_separator)]


class PatternPolicy(BaseModel):
    """Limits a pattern must satisfy before it is compiled.

    Attributes:
        separator: Label separator used for compiling and matching.
        max_wildcard_run: Longest allowed run of adjacent ``*``/``+`` tokens,
            or None for no limit.
        max_segments: Largest allowed number of tokens, or None for no limit.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    separator: Separator = "."
    max_wildcard_run: int | None = Field(default=None, ge=1)
    max_segments: int | None = Field(default=None, ge=1)

    @classmethod
    def from_config(cls, config: Config, section: str = "patterns") -> PatternPolicy:
        """Build a policy from a configuration section.

        Raises:
            ConfigError: If the section holds unknown keys or invalid values.
        """
        try:
            return cls.model_validate(config.section(section))
        except ValidationError as e:
            raise ConfigError(f"Invalid '{section}' configuration: {e}", cause=e) from e

    def check(self, pattern: str) -> None:
        """Raise PatternRejectedError if ``pattern`` exceeds a limit."""
        tokens = pattern.split(self.separator)

        if self.max_segments is not None and len(tokens) > self.max_segments:
            self._reject(
                pattern,
                f"{len(tokens)} segments exceed the limit of {self.max_segments}",
            )

        if self.max_wildcard_run is not None:
            run = longest = 0
            for token in tokens:
                run = run + 1 if token in _SINGLE_SEGMENT_WILDCARDS else 0
                longest = max(longest, run)
            if longest > self.max_wildcard_run:
                self._reject(
                    pattern,
                    f"{longest} adjacent single-segment wildcards exceed "
                    f"the limit of {self.max_wildcard_run}",
                )

    def compile(self, pattern: str) -> CompiledPattern:
        """Check ``pattern`` against the policy, then compile it.

        Raises:
            PatternRejectedError: If the pattern exceeds a limit.
            InvalidTokenError: If the pattern has a malformed token.
        """
        self.check(pattern)
        return compile_pattern(pattern, self.separator)

    def _reject(self, pattern: str, reason: str) -> None:
        logger.warning("Rejected pattern %r: %s", pattern, reason)
        raise PatternRejectedError(pattern, reason)
