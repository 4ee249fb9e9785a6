"""Error hierarchy for the domainpattern package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "PatternError",
    "InvalidTokenError",
    "ParseError",
    "InvalidSeparatorError",
    "PatternRejectedError",
    "ConfigNotFoundError",
    "ConfigError",
    "RuleError",
    "ErrorCodes",
]


def _display(value: str | bytes | memoryview) -> str:
    if isinstance(value, memoryview):
        value = value.tobytes()
    if isinstance(value, bytes):
        return value.decode("utf-8", "backslashreplace")
    return value


class PatternError(Exception):
    """Base error for all domainpattern errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class InvalidTokenError(PatternError):
    """Raised when a pattern token mixes wildcard characters with a literal."""

    def __init__(
        self, token: str | bytes, position: int, pattern: str | bytes, **kwargs: Any
    ) -> None:
        super().__init__(
            code="INVALID_TOKEN",
            message=(
                f'Invalid token "{_display(token)}" at position {position} '
                f'in pattern "{_display(pattern)}"'
            ),
            details={"token": token, "position": position, "pattern": pattern},
            **kwargs,
        )

    def __str__(self) -> str:
        return self.message

    @property
    def token(self) -> str | bytes:
        """The offending raw token."""
        return self.details["token"]

    @property
    def position(self) -> int:
        """Offset of the token within the original pattern."""
        return self.details["position"]

    @property
    def pattern(self) -> str | bytes:
        """The full pattern that failed to compile."""
        return self.details["pattern"]


ParseError = InvalidTokenError


class InvalidSeparatorError(PatternError):
    """Raised when a separator is not a single non-wildcard character."""

    def __init__(self, separator: str | bytes, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_SEPARATOR",
            message=(
                f"Invalid separator {separator!r}: expected a single character "
                "other than '*' or '+'"
            ),
            details={"separator": separator},
            **kwargs,
        )

    @property
    def separator(self) -> str | bytes:
        """The rejected separator."""
        return self.details["separator"]


class PatternRejectedError(PatternError):
    """Raised when a pattern violates the configured acceptance policy."""

    def __init__(self, pattern: str | bytes, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="PATTERN_REJECTED",
            message=f'Pattern "{_display(pattern)}" rejected: {reason}',
            details={"pattern": pattern, "reason": reason},
            **kwargs,
        )

    @property
    def pattern(self) -> str | bytes:
        """The rejected pattern."""
        return self.details["pattern"]

    @property
    def reason(self) -> str:
        """Why the policy rejected the pattern."""
        return self.details["reason"]


class ConfigNotFoundError(PatternError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(PatternError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class RuleError(PatternError):
    """Raised when a rule definition is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="RULE_ERROR", message=message, **kwargs)


class ErrorCodes:
    """All domainpattern error codes as constants.

    Example:
        if error.code == ErrorCodes.INVALID_TOKEN:
            report(error.position)
    """

    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_SEPARATOR = "INVALID_SEPARATOR"
    PATTERN_REJECTED = "PATTERN_REJECTED"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    RULE_ERROR = "RULE_ERROR"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
