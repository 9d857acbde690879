"""Predicate composition: Boolean logic over a value extracted from a context.

SinglePredicate pairs an input (what to look at) with a matcher (what to
accept). And, Or and Not compose predicates with short-circuit evaluation.

The Predicate union type is pattern-matchable via match/case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

Ctx = TypeVar("Ctx", contravariant=True)


class Input(Protocol[Ctx]):
    """Extract an integer attribute from a context (e.g. a response code)."""

    def get(self, ctx: Ctx, /) -> int: ...


class ValueMatcher(Protocol):
    """Accept or reject an extracted value."""

    def matches(self, value: int, /) -> bool: ...


@dataclass(frozen=True, slots=True)
class SinglePredicate[C]:
    """Extract a value from the context, then match it."""

    input: Input[C]
    matcher: ValueMatcher

    def evaluate(self, ctx: C) -> bool:
        return self.matcher.matches(self.input.get(ctx))


@dataclass(frozen=True, slots=True)
class And[C]:
    """All predicates must hold. Stops at the first False; empty And is True."""

    predicates: tuple[Predicate[C], ...]

    def evaluate(self, ctx: C) -> bool:
        return all(p.evaluate(ctx) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Or[C]:
    """Any predicate must hold. Stops at the first True; empty Or is False."""

    predicates: tuple[Predicate[C], ...]

    def evaluate(self, ctx: C) -> bool:
        return any(p.evaluate(ctx) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Not[C]:
    """Inverts the inner predicate."""

    predicate: Predicate[C]

    def evaluate(self, ctx: C) -> bool:
        return not self.predicate.evaluate(ctx)


type Predicate[C] = SinglePredicate[C] | And[C] | Or[C] | Not[C]
