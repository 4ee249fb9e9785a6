"""domainpattern - hierarchical-label pattern matching for domains and paths."""

from __future__ import annotations

# Core
from domainpattern.compiler import compile_pattern
from domainpattern.pattern import CompiledPattern, match_pattern
from domainpattern.steps import Static, Step, Wildcard

# Config
from domainpattern.config import Config

# Policy and rules
from domainpattern.policy import PatternPolicy
from domainpattern.rules import MatchRule, RuleSet

# Errors
from domainpattern.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    InvalidSeparatorError,
    InvalidTokenError,
    ParseError,
    PatternError,
    PatternRejectedError,
    RuleError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "compile_pattern",
    "CompiledPattern",
    "match_pattern",
    "Static",
    "Step",
    "Wildcard",
    # Config
    "Config",
    # Policy and rules
    "PatternPolicy",
    "MatchRule",
    "RuleSet",
    # Errors
    "ErrorCodes",
    "PatternError",
    "InvalidTokenError",
    "ParseError",
    "InvalidSeparatorError",
    "PatternRejectedError",
    "ConfigError",
    "ConfigNotFoundError",
    "RuleError",
]
