from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from fsmkit.alphabet import Alphabet
from fsmkit.errors import UnknownSymbolError
from fsmkit.machine import Machine
from fsmkit.state import State
from fsmkit.transitions import Transition, TransitionFunction


@dataclass(frozen=True)
class Step:
    position: int       # index of the consumed symbol in the word
    state: State        # state before reading it
    symbol: str
    next_state: State   # state after reading it


class DFA(Machine):
    """
    deterministic machine: exactly one transition per (state, symbol), no ε.

    origin optionally tells, for a machine built by subset construction,
    which nfa labels each state stands for. it is only used for display and
    takes no part in equality or encoding.
    """

    mapping_class = TransitionFunction

    def __init__(
        self,
        states: Iterable[State],
        alphabet: Union[Alphabet, Iterable[str]],
        transitions: Iterable[Transition],
        initial_state: State,
        accepting_states: Iterable[State] = (),
        origin: Optional[Mapping[State, FrozenSet[int]]] = None,
    ):
        super().__init__(states, alphabet, transitions, initial_state, accepting_states)
        self._origin: Dict[State, FrozenSet[int]] = {
            q: members for q, members in (origin or {}).items() if q in self._states
        }

    def _create(self, states, transitions, initial_state, accepting_states, renaming=None):
        if renaming is None:
            origin = self._origin
        else:
            origin = {renaming[q]: members for q, members in self._origin.items() if q in renaming}
        return DFA(states, self._alphabet, transitions, initial_state, accepting_states, origin)

    @property
    def origin(self) -> Mapping[State, FrozenSet[int]]:
        return dict(self._origin)

    def next_state(self, state: State, symbol: str) -> State:
        return self._transitions.next(state, symbol)

    # ---------- evaluation ----------
    def run(self, word: str) -> List[Step]:
        """
        the steps taken while reading word from the initial state.
        raises UnknownSymbolError on the first symbol outside the alphabet.
        """
        steps: List[Step] = []
        cur = self._initial_state
        for i, ch in enumerate(word):
            if ch not in self._alphabet:
                raise UnknownSymbolError(ch, i)
            nxt = self._transitions.next(cur, ch)
            steps.append(Step(i, cur, ch, nxt))
            cur = nxt
        return steps

    def compute(self, word: str) -> bool:
        """True iff the machine ends in an accepting state after reading word."""
        cur = self._initial_state
        for i, ch in enumerate(word):
            if ch not in self._alphabet:
                raise UnknownSymbolError(ch, i)
            cur = self._transitions.next(cur, ch)
        return cur in self._accepting_states

    def to_dfa(self) -> "DFA":
        return self
