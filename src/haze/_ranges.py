"""Numeric range sets: the ``200,301-302,404-499`` syntax.

A RangeSet is a union of closed integer intervals. Membership is true if the
value falls in any member range, so the order of ranges never matters.
"""

from __future__ import annotations

from dataclasses import dataclass


class RangeParseError(ValueError):
    """A range token could not be parsed."""

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"invalid range {token!r}: {reason}")


@dataclass(frozen=True, slots=True)
class Range:
    """Closed integer interval [from_, to]."""

    from_: int
    to: int

    def __post_init__(self) -> None:
        if self.from_ > self.to:
            msg = f"{self.from_}-{self.to}"
            raise RangeParseError(msg, "lower bound is greater than upper bound")

    def __contains__(self, value: int) -> bool:
        return self.from_ <= value <= self.to


@dataclass(frozen=True, slots=True)
class RangeSet:
    """Union of closed integer ranges."""

    ranges: tuple[Range, ...]

    def contains(self, value: int) -> bool:
        """True iff value lies in at least one member range."""
        return any(value in r for r in self.ranges)

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    def __str__(self) -> str:
        return ",".join(
            str(r.from_) if r.from_ == r.to else f"{r.from_}-{r.to}" for r in self.ranges
        )


def parse_range(text: str) -> Range:
    """Parse a single ``a`` or ``a-b`` token.

    Raises:
        RangeParseError: If a bound is not a non-negative integer, or the
            token has more than one dash.
    """
    token = text.strip()
    parts = token.split("-")
    if len(parts) > 2:
        raise RangeParseError(text, "expected at most one '-'")

    from_ = _parse_bound(text, parts[0])
    to = _parse_bound(text, parts[1]) if len(parts) == 2 else from_
    return Range(from_, to)


def parse_ranges(text: str) -> RangeSet:
    """Parse a comma-separated list of range tokens into a RangeSet."""
    return RangeSet(tuple(parse_range(token) for token in text.split(",")))


def _parse_bound(token: str, part: str) -> int:
    part = part.strip()
    if not part:
        raise RangeParseError(token, "missing number")
    if not part.isascii() or not part.isdigit():
        raise RangeParseError(token, f"{part!r} is not a number")
    return int(part)
