from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, Iterable, Iterator

from fsmkit.alphabet import Alphabet
from fsmkit.config import EPSILON, EPSILON_GLYPH, FIELD_SEP
from fsmkit.errors import ValidationError
from fsmkit.state import State

_NOWHERE: FrozenSet[State] = frozenset()


@dataclass(frozen=True)
class Transition:
    from_state: State
    symbol: str
    to_state: State

    def encode(self) -> str:
        return FIELD_SEP.join((self.from_state.encode(), self.symbol, self.to_state.encode()))

    def pretty(self) -> str:
        symbol = EPSILON_GLYPH if self.symbol == EPSILON else self.symbol
        return f"({self.from_state.pretty()}, {symbol}, {self.to_state.pretty()})"


class TransitionRelation:
    """
    Δ: (state, symbol) -> set of states. may use the ε marker as a symbol.
    """

    pretty_name = "Δ"

    def __init__(self, transitions: Iterable[Transition]):
        self._transitions: FrozenSet[Transition] = frozenset(transitions)
        index: Dict[State, Dict[str, set]] = {}
        for t in self._transitions:
            index.setdefault(t.from_state, {}).setdefault(t.symbol, set()).add(t.to_state)
        self._delta: Dict[State, Dict[str, FrozenSet[State]]] = {
            q: {sym: frozenset(dests) for sym, dests in row.items()} for q, row in index.items()
        }

    # ---------- queries ----------
    def at(self, state: State, symbol: str) -> FrozenSet[State]:
        """destinations of state on symbol (empty when undefined)"""
        return self._delta.get(state, {}).get(symbol, _NOWHERE)

    def transitions(self) -> FrozenSet[Transition]:
        return self._transitions

    def __iter__(self) -> Iterator[Transition]:
        return iter(self._transitions)

    def __len__(self) -> int:
        return len(self._transitions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionRelation):
            return NotImplemented
        return self._transitions == other._transitions

    def __hash__(self) -> int:
        return hash(self._transitions)

    # ---------- validation ----------
    def verify(self, states: AbstractSet[State], alphabet: Alphabet) -> None:
        for t in self._transitions:
            if t.from_state not in states:
                raise ValidationError(f"transition {t.encode()} starts at unknown state {t.from_state.label}")
            if t.to_state not in states:
                raise ValidationError(f"transition {t.encode()} leads to unknown state {t.to_state.label}")
            if t.symbol != EPSILON and t.symbol not in alphabet:
                raise ValidationError(f"transition {t.encode()} uses unknown symbol {t.symbol!r}")


class TransitionFunction(TransitionRelation):
    """
    δ: (state, symbol) -> state. total over states x alphabet, no ε.
    """

    pretty_name = "δ"

    def next(self, state: State, symbol: str) -> State:
        (dest,) = self.at(state, symbol)
        return dest

    def verify(self, states: AbstractSet[State], alphabet: Alphabet) -> None:
        for t in self._transitions:
            if t.symbol == EPSILON:
                raise ValidationError(f"deterministic machine has an epsilon transition: {t.encode()}")
        super().verify(states, alphabet)

        for q in states:
            for sym in alphabet:
                dests = self.at(q, sym)
                if not dests:
                    raise ValidationError(f"no transition from state {q.label} on {sym!r}")
                if len(dests) > 1:
                    labels = " ".join(str(s.label) for s in sorted(dests))
                    raise ValidationError(f"state {q.label} on {sym!r} leads to several states: {labels}")
