"""Pattern compiler: tokenizes a pattern and folds adjacent wildcards."""

from __future__ import annotations

import logging
from typing import Iterator

from domainpattern.errors import InvalidSeparatorError, InvalidTokenError
from domainpattern.pattern import CompiledPattern
from domainpattern.steps import Static, Step, Wildcard

__all__ = ["compile_pattern", "tokenize", "fold"]

logger = logging.getLogger(__name__)

_TEXT_WILDCARDS: dict[str, Wildcard] = {
    "*": Wildcard(multi=False, optional=True),
    "+": Wildcard(multi=False, optional=False),
    "**": Wildcard(multi=True, optional=True),
    "**+": Wildcard(multi=True, optional=False),
}
_BYTE_WILDCARDS: dict[bytes, Wildcard] = {
    token.encode("ascii"): wildcard for token, wildcard in _TEXT_WILDCARDS.items()
}
_TEXT_RESERVED = ("*", "+")
_BYTE_RESERVED = (b"*", b"+")


def tokenize(pattern: str | bytes, separator: str | bytes) -> Iterator[tuple[int, str | bytes]]:
    """Yield ``(position, token)`` for every separator-delimited token.

    Empty tokens are yielded as well. ``position`` is the offset of the
    token's first character (or byte) in ``pattern``.
    """
    position = 0
    for token in pattern.split(separator):
        yield position, token
        position += len(token) + 1


def fold(steps: list[Step], wildcard: Wildcard) -> None:
    """Append ``wildcard`` to ``steps``, merging it into a preceding wildcard.

    The rewrites never change which names match; they only reduce how many
    threads the engine has to track:

    - ``**.**`` becomes ``**``.
    - ``**.+``, ``+.**``, ``**+.*`` and ``*.**+`` become ``**+``. ``+.*`` is
      left alone, it is not the same as ``**+``.
    - ``**+.+`` and ``**+.**+`` become ``+.**+``, so chains cascade into
      single required steps followed by one repeating step.
    """
    last = steps[-1] if steps else None
    if isinstance(last, Wildcard):
        if last.multi and last.optional and wildcard.multi and wildcard.optional:
            logger.debug("Folded %s into preceding %s", wildcard.token, last.token)
            return

        if wildcard.optional != last.optional and (last.multi or wildcard.multi):
            steps[-1] = Wildcard(multi=True, optional=False)
            logger.debug("Folded %s.%s into **+", last.token, wildcard.token)
            return

        if last.multi and not last.optional and not wildcard.optional:
            steps[-1] = Wildcard(multi=False, optional=False)
            wildcard = Wildcard(multi=True, optional=False)
            logger.debug("Shifted repetition of %s one step right", last.token)

    steps.append(wildcard)


def _check_kinds(pattern: str | bytes, separator: str | bytes, borrow: bool) -> None:
    if not isinstance(pattern, (str, bytes)):
        raise TypeError(f"pattern must be str or bytes, not {type(pattern).__name__}")
    if isinstance(pattern, str) != isinstance(separator, str) or not isinstance(
        separator, (str, bytes)
    ):
        raise TypeError(
            f"separator {separator!r} is not the same kind as the pattern "
            f"({type(pattern).__name__})"
        )
    if len(separator) != 1 or separator in _TEXT_RESERVED or separator in _BYTE_RESERVED:
        raise InvalidSeparatorError(separator)
    if borrow and not isinstance(pattern, bytes):
        raise TypeError("borrow=True requires a bytes pattern")


def compile_pattern(
    pattern: str | bytes, separator: str | bytes = ".", *, borrow: bool = False
) -> CompiledPattern:
    """Compile ``pattern`` into a :class:`CompiledPattern`.

    Tokens ``*``, ``+``, ``**`` and ``**+`` become wildcards; every other
    token is a literal label. An empty pattern compiles to a single empty
    label that matches no name.

    Args:
        pattern: The pattern, e.g. ``"**.example.com"``. ``bytes`` patterns
            match ``bytes`` names.
        separator: A single character (one byte for bytes patterns) that
            splits both the pattern and the names it is matched against.
        borrow: Keep literals as ``memoryview`` slices of a bytes pattern
            instead of copies. The compiled pattern must then not outlive
            ``pattern``; call :meth:`CompiledPattern.to_owned` to detach it.

    Returns:
        The compiled pattern.

    Raises:
        InvalidTokenError: If a token contains ``*`` or ``+`` but is not one
            of the four wildcard shorthands.
        InvalidSeparatorError: If the separator is not a single character,
            or is ``*`` or ``+``.
        TypeError: If pattern and separator are not both str or both bytes.
    """
    _check_kinds(pattern, separator, borrow)

    if isinstance(pattern, str):
        wildcards: dict[str | bytes, Wildcard] = _TEXT_WILDCARDS
        reserved: tuple[str | bytes, ...] = _TEXT_RESERVED
    else:
        wildcards = _BYTE_WILDCARDS
        reserved = _BYTE_RESERVED
    source = memoryview(pattern) if borrow else None

    steps: list[Step] = []
    for position, token in tokenize(pattern, separator):
        wildcard = wildcards.get(token)
        if wildcard is not None:
            fold(steps, wildcard)
            continue

        if any(char in token for char in reserved):
            raise InvalidTokenError(token, position, pattern)

        if source is not None:
            steps.append(Static(source[position : position + len(token)]))
        else:
            steps.append(Static(token))

    logger.debug("Compiled pattern %r into %d steps", pattern, len(steps))
    return CompiledPattern(steps=tuple(steps), separator=separator)
