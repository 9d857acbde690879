"""Response classification: matchers, filters and the reportable rule.

Matchers are an allow-list: a response is eligible when any matcher accepts
it, and vacuously eligible when no matcher is configured. Filters are
mandatory exclusion rules: every filter must accept the response.

    reportable = all(filters) and (any(matchers) or not matchers)

Every predicate here is a frozen value over an immutable RangeSet and can be
evaluated from any number of threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from haze._predicate import And, Not, Or, Predicate, SinglePredicate
from haze._ranges import parse_ranges

if TYPE_CHECKING:
    from collections.abc import Sequence

    from haze._ranges import RangeSet
    from haze.http._response import Response


@dataclass(frozen=True, slots=True)
class CodeInput:
    """Extracts the response status code."""

    def get(self, ctx: Response, /) -> int:
        return ctx.code


@dataclass(frozen=True, slots=True)
class LengthInput:
    """Extracts the response length in bytes."""

    def get(self, ctx: Response, /) -> int:
        return ctx.length


@dataclass(frozen=True, slots=True)
class RangeMatcher:
    """Accepts values that fall in any range of the set."""

    ranges: RangeSet

    def matches(self, value: int, /) -> bool:
        return self.ranges.contains(value)


def match_codes(ranges: str) -> Predicate[Response]:
    """Matcher accepting responses whose status code is in ``ranges``.

    Raises:
        RangeParseError: If ``ranges`` is malformed.
    """
    return SinglePredicate(CodeInput(), RangeMatcher(parse_ranges(ranges)))


def match_lengths(ranges: str) -> Predicate[Response]:
    """Matcher accepting responses whose length is in ``ranges``."""
    return SinglePredicate(LengthInput(), RangeMatcher(parse_ranges(ranges)))


def filter_codes(ranges: str) -> Predicate[Response]:
    """Filter rejecting responses whose status code is in ``ranges``.

    Evaluates True when the response is kept (not excluded).
    """
    return Not(match_codes(ranges))


def filter_lengths(ranges: str) -> Predicate[Response]:
    """Filter rejecting responses whose length is in ``ranges``."""
    return Not(match_lengths(ranges))


def is_reportable(
    response: Response,
    matchers: Sequence[Predicate[Response]],
    filters: Sequence[Predicate[Response]],
) -> bool:
    """Decide whether a response is worth showing to the operator.

    Matchers are ORed (stop at the first hit) and satisfied when empty.
    Filters are ANDed; no filter is evaluated after the first one fails.
    """
    matched = Or(tuple(matchers)).evaluate(response)
    filtered = And(tuple(filters)).evaluate(response)
    return filtered and (matched or not matchers)
