"""
shape shared by every finite state machine: states, alphabet, transitions,
initial state and accepting states, plus the read-only operations that only
need that shape (pruning, canonical renumbering, encoding).

machines are values. nothing here mutates a machine after __init__; every
operation builds a new one.
"""

import logging
import sys
from collections import deque
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, TextIO, Union

from fsmkit import pretty
from fsmkit.alphabet import Alphabet
from fsmkit.config import EPSILON, SECTION_SEP, TRANSITION_SEP
from fsmkit.errors import ValidationError
from fsmkit.state import State, encode_state_set
from fsmkit.transitions import Transition, TransitionRelation

logger = logging.getLogger(__name__)


class Machine:

    mapping_class = TransitionRelation

    def __init__(
        self,
        states: Iterable[State],
        alphabet: Union[Alphabet, Iterable[str]],
        transitions: Iterable[Transition],
        initial_state: State,
        accepting_states: Iterable[State] = (),
    ):
        self._states: FrozenSet[State] = frozenset(states)
        self._alphabet = alphabet if isinstance(alphabet, Alphabet) else Alphabet(alphabet)
        self._transitions = self.mapping_class(transitions)
        self._initial_state = initial_state
        self._accepting_states: FrozenSet[State] = frozenset(accepting_states)
        self._verify()

    def _verify(self):
        if self._initial_state not in self._states:
            raise ValidationError(f"initial state {self._initial_state!r} is not one of the states")
        stray = self._accepting_states - self._states
        if stray:
            labels = encode_state_set(stray)
            raise ValidationError(f"accepting states are not a subset of the states: {labels}")
        self._transitions.verify(self._states, self._alphabet)

    def _create(
        self,
        states: Iterable[State],
        transitions: Iterable[Transition],
        initial_state: State,
        accepting_states: Iterable[State],
        renaming: Optional[Mapping[State, State]] = None,
    ) -> "Machine":
        """
        builds a machine of the same kind over the same alphabet.
        renaming maps old states to new ones when labels were changed.
        """
        return type(self)(states, self._alphabet, transitions, initial_state, accepting_states)

    # ---------- components ----------
    @property
    def states(self) -> FrozenSet[State]:
        return self._states

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def transitions(self) -> TransitionRelation:
        return self._transitions

    @property
    def initial_state(self) -> State:
        return self._initial_state

    @property
    def accepting_states(self) -> FrozenSet[State]:
        return self._accepting_states

    def is_accepting(self, state: State) -> bool:
        return state in self._accepting_states

    def targets(self, state: State) -> List[State]:
        """
        every destination of state, symbols in alphabet order then ε,
        destinations of one symbol in label order. repeats are kept.
        """
        out: List[State] = []
        for symbol in self._alphabet.with_epsilon():
            out.extend(sorted(self._transitions.at(state, symbol)))
        return out

    # ---------- unreachable states ----------
    def reachable_states(self) -> FrozenSet[State]:
        """states reachable from the initial state on any symbol or ε"""
        reachable: Set[State] = {self._initial_state}
        queue = deque([self._initial_state])
        while queue:
            q = queue.popleft()
            for nxt in self.targets(q):
                if nxt not in reachable:
                    reachable.add(nxt)
                    queue.append(nxt)
        return frozenset(reachable)

    def remove_unreachable_states(self) -> "Machine":
        """
        a machine recognizing the same language, restricted to the states
        reachable from the initial state.
        """
        reachable = self.reachable_states()
        kept = [t for t in self._transitions if t.from_state in reachable and t.to_state in reachable]
        logger.debug("pruning keeps %d of %d states", len(reachable), len(self._states))
        return self._create(reachable, kept, self._initial_state, self._accepting_states & reachable)

    # ---------- canonical form ----------
    def to_canonic_form(self) -> "Machine":
        """
        renumbers the states 0, 1, ... in first-visit order of a breadth-first
        walk from the initial state. unreachable states disappear.

        the walk looks at symbols in alphabet order then ε, and at the
        destinations of one symbol in label order, so the same machine always
        gives the same encoding. isomorphic dfas do too; isomorphic nfas only
        when several destinations of one symbol keep their relative label order.
        """
        renaming: Dict[State, State] = {self._initial_state: State(0)}
        queue = deque([self._initial_state])
        canonic: Set[Transition] = set()

        while queue:
            q = queue.popleft()
            for symbol in self._alphabet.with_epsilon():
                for nxt in sorted(self._transitions.at(q, symbol)):
                    if nxt not in renaming:
                        renaming[nxt] = State(len(renaming))
                        queue.append(nxt)
                    canonic.add(Transition(renaming[q], symbol, renaming[nxt]))

        accepting = [renaming[s] for s in self._accepting_states if s in renaming]
        return self._create(renaming.values(), canonic, renaming[self._initial_state], accepting, renaming)

    # ---------- encoding ----------
    def _transition_order(self, t: Transition):
        return t.from_state.label, self._alphabet.position(t.symbol), t.to_state.label

    def sorted_transitions(self) -> List[Transition]:
        return sorted(self._transitions, key=self._transition_order)

    def encode(self) -> str:
        """
        states/alphabet/transitions/initial/accepting, e.g.
        0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1
        """
        return SECTION_SEP.join((
            encode_state_set(self._states),
            self._alphabet.encode(),
            TRANSITION_SEP.join(t.encode() for t in self.sorted_transitions()),
            self._initial_state.encode(),
            encode_state_set(self._accepting_states),
        ))

    def uses_epsilon(self) -> bool:
        return any(t.symbol == EPSILON for t in self._transitions)

    # ---------- printing ----------
    def pretty_print(self, out: TextIO = None):
        """set notation description: K, Σ, δ/Δ, s, A"""
        print(pretty.set_notation(self), file=out or sys.stdout)

    def transition_table(self):
        return pretty.transition_table(self)

    # ---------- value semantics ----------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._states == other._states
            and self._alphabet == other._alphabet
            and self._transitions == other._transitions
            and self._initial_state == other._initial_state
            and self._accepting_states == other._accepting_states
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._states, self._alphabet, self._transitions,
                     self._initial_state, self._accepting_states))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.encode()!r})"
