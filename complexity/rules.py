"""
Ordered decision lists mapping detected signals to complexity labels.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, TypeVar

SignalsT = TypeVar("SignalsT")


@dataclass(frozen=True)
class Rule(Generic[SignalsT]):
    """One row of a decision list."""

    name: str
    predicate: Callable[[SignalsT], bool]
    time: Callable[[SignalsT], str]
    # Space label that replaces the heuristic one when this rule fires.
    space: Optional[str] = None

    def matches(self, signals: SignalsT) -> bool:
        return self.predicate(signals)


@dataclass(frozen=True)
class Verdict:
    rule: str
    time: str
    space: Optional[str]


def constant(label: str) -> Callable[[object], str]:
    return lambda _signals: label


def classify(rules: Sequence[Rule[SignalsT]], signals: SignalsT) -> Verdict:
    """Return the verdict of the first matching rule."""
    for rule in rules:
        if rule.matches(signals):
            return Verdict(rule=rule.name, time=rule.time(signals), space=rule.space)
    raise LookupError("decision list has no catch-all rule")
