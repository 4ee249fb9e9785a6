"""Matching engine: simulates every live match thread segment by segment.

A thread is an index into the step sequence. Each generation holds the
indices reachable after consuming a prefix of the name; an index equal to
the number of steps means the pattern is fully satisfied. The first
generation is index 0 plus every index reachable by skipping leading
optional wildcards. Generations are
plain lists that are sorted and skipped over for duplicates, then swapped
and cleared, so a call allocates two buffers regardless of name length.

Runs of many single-segment wildcards (``*.*.*.*``) still multiply the
number of live threads; bounding that is left to
:class:`domainpattern.policy.PatternPolicy`.
"""

from __future__ import annotations

from typing import Sequence

from domainpattern.steps import Static, Step, Wildcard

__all__ = ["run"]


def run(steps: Sequence[Step], separator: str | bytes, name: str | bytes) -> bool:
    """Return True if ``name`` is accepted by ``steps``.

    Empty segments (leading, trailing or doubled separators) are skipped and
    do not advance any thread. A name without a single non-empty segment is
    never accepted.

    Raises:
        TypeError: If ``name`` is not the same kind (str or bytes) as
            ``separator``.
    """
    if isinstance(separator, str) != isinstance(name, str):
        kind = "str" if isinstance(separator, str) else "bytes-like"
        raise TypeError(
            f"cannot use a {kind} pattern on a {type(name).__name__} name"
        )

    count = len(steps)
    current: list[int] = [0]
    pending: list[int] = []
    accepted = False

    # Leading optional wildcards may be skipped before the first segment.
    start = 0
    while start < count and _is_optional(steps[start]):
        start += 1
        current.append(start)

    for label in name.split(separator):
        if not label:
            continue

        accepted = False
        current.sort()
        previous = -1

        for index in current:
            if index >= count or index == previous:
                continue
            previous = index

            step = steps[index]
            if isinstance(step, Static):
                if step.label != label:
                    continue
            elif step.multi:
                pending.append(index)

            following = index + 1
            if following == count:
                accepted = True
                continue
            pending.append(following)

            # Optional wildcards may be skipped without consuming a segment.
            while _is_optional(steps[following]):
                following += 1
                if following == count:
                    accepted = True
                    break
                pending.append(following)

        current, pending = pending, current
        pending.clear()

    return accepted


def _is_optional(step: Step) -> bool:
    return isinstance(step, Wildcard) and step.optional
