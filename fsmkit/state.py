from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Union

from fsmkit.config import EMPTY_SET_GLYPH
from fsmkit.errors import MalformedEncodingError


@dataclass(frozen=True, order=True)
class State:
    """
    a machine state: nothing but a stable integer label.
    two states are equal iff their labels are equal.
    """

    label: int

    def __post_init__(self):
        if isinstance(self.label, bool) or not isinstance(self.label, int):
            raise TypeError(f"state label must be an int, got {self.label!r}")

    def encode(self) -> str:
        return str(self.label)

    def pretty(self) -> str:
        return f"q{self.label}"

    def __repr__(self) -> str:
        return f"State({self.label})"


def parse_state_ids(text: str) -> List[int]:
    """
    whitespace separated integer labels, in the order written.
    """
    ids: List[int] = []
    for token in text.split():
        try:
            ids.append(int(token))
        except ValueError:
            raise MalformedEncodingError(f"state label is not an integer: {token!r}") from None
    return ids


def encode_state_set(states: Iterable[State]) -> str:
    return " ".join(s.encode() for s in sorted(states))


def pretty_state_set(states: Iterable[State]) -> str:
    states = sorted(states)
    return "{" + ", ".join(s.pretty() for s in states) + "}" if states else EMPTY_SET_GLYPH


# =========================================
# keys of the subset construction
# =========================================

@dataclass(frozen=True)
class Sink:
    """the empty subset: no valid continuation"""

    @property
    def members(self) -> FrozenSet[int]:
        return frozenset()

    def __repr__(self) -> str:
        return "Sink()"


@dataclass(frozen=True)
class Subset:
    """
    a non-empty set of nfa state labels standing for one dfa state.
    equality is set equality of the members.
    """

    members: FrozenSet[int]

    def __post_init__(self):
        if not self.members:
            raise ValueError("an empty subset is the Sink")

    def __repr__(self) -> str:
        return f"Subset({sorted(self.members)!r})"


SubsetKey = Union[Sink, Subset]

SINK = Sink()


def subset_key(states: Iterable[State]) -> SubsetKey:
    labels = frozenset(s.label for s in states)
    return Subset(labels) if labels else SINK
