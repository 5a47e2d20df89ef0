"""
non-deterministic machines (with ε-moves) and the subset construction that
turns one into an equivalent deterministic machine.
"""

import logging
from collections import deque
from typing import AbstractSet, Dict, FrozenSet, List, Set

from fsmkit.config import EPSILON
from fsmkit.dfa import DFA
from fsmkit.errors import UnknownSymbolError
from fsmkit.machine import Machine
from fsmkit.state import SINK, Sink, State, SubsetKey, subset_key
from fsmkit.transitions import Transition

logger = logging.getLogger(__name__)


class NFA(Machine):
    """
    non-deterministic machine. a (state, symbol) pair may lead to any number
    of states and the ε marker may label transitions.
    """

    # ---------- ε-closure ----------
    def eps_closure(self, S: AbstractSet[State]) -> FrozenSet[State]:
        """
        every state reachable from S through zero or more ε-moves.
        """
        st = set(S)
        stack = list(S)
        while stack:
            q = stack.pop()
            for nxt in self._transitions.at(q, EPSILON):
                if nxt not in st:
                    st.add(nxt)
                    stack.append(nxt)
        return frozenset(st)

    def epsilon_closures(self) -> Dict[State, FrozenSet[State]]:
        """closure of every single state; each closure contains its state"""
        return epsilon_closures(self)

    # ---------- one step on a symbol ----------
    def move(self, S: AbstractSet[State], symbol: str) -> FrozenSet[State]:
        """states reachable from S on symbol, without ε-closure"""
        out: Set[State] = set()
        for q in S:
            out |= self._transitions.at(q, symbol)
        return frozenset(out)

    # ---------- evaluation ----------
    def simulate(self, word: str) -> bool:
        """
        runs the machine directly on sets of states (move, then close).
        independent of the subset construction.
        """
        cur = self.eps_closure({self._initial_state})
        for i, ch in enumerate(word):
            if ch not in self._alphabet:
                raise UnknownSymbolError(ch, i)
            cur = self.eps_closure(self.move(cur, ch))
        return bool(cur & self._accepting_states)

    def compute(self, word: str) -> bool:
        return self.to_dfa().compute(word)

    # ---------- conversion ----------
    def to_dfa(self) -> DFA:
        return nfa_to_dfa(self)


# =========================================
# subset construction
# =========================================

def epsilon_closures(nfa: NFA) -> Dict[State, FrozenSet[State]]:
    closures = {q: nfa.eps_closure({q}) for q in nfa.states}
    logger.debug("computed ε-closures of %d states", len(closures))
    return closures


def _successor(
    nfa: NFA,
    closures: Dict[State, FrozenSet[State]],
    key: SubsetKey,
    symbol: str,
) -> SubsetKey:
    """closure of the move on symbol from every member of the subset"""
    reached: Set[State] = set()
    for q in nfa.move({State(label) for label in key.members}, symbol):
        reached |= closures[q]
    return subset_key(reached)


def _number_subsets(
    start: SubsetKey,
    delta: Dict[SubsetKey, Dict[str, SubsetKey]],
    symbols,
) -> Dict[SubsetKey, State]:
    """
    labels 0, 1, ... in first-visit order of a breadth-first walk from start,
    symbols in alphabet order.
    """
    labels: Dict[SubsetKey, State] = {start: State(0)}
    queue = deque([start])
    while queue:
        key = queue.popleft()
        for a in symbols:
            nxt = delta[key][a]
            if nxt not in labels:
                labels[nxt] = State(len(labels))
                queue.append(nxt)
    return labels


def nfa_to_dfa(nfa: NFA) -> DFA:
    """
    an equivalent deterministic machine.

    each reachable set of nfa states (closed under ε) becomes one dfa state;
    the set itself is the key of the single table that maps subsets to dfa
    states, so a subset reached along several paths is still one state. an
    empty successor is the sink, which loops to itself on every symbol.
    a subset accepts iff it holds an accepting nfa state.

    the worklist only ever holds subsets not seen before, and there are at
    most 2^n of them plus the sink, so the loop terminates.
    """
    closures = epsilon_closures(nfa)
    symbols = nfa.alphabet.symbols

    start = subset_key(closures[nfa.initial_state])
    delta: Dict[SubsetKey, Dict[str, SubsetKey]] = {}
    queue = deque([start])
    seen: Set[SubsetKey] = {start}

    while queue:
        key = queue.popleft()
        if isinstance(key, Sink):
            delta[key] = {a: SINK for a in symbols}
            continue
        row = delta[key] = {}
        for a in symbols:
            nxt = _successor(nfa, closures, key, a)
            row[a] = nxt
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)

    labels = _number_subsets(start, delta, symbols)
    accepting_labels = {q.label for q in nfa.accepting_states}

    transitions: List[Transition] = [
        Transition(labels[key], a, labels[nxt]) for key, row in delta.items() for a, nxt in row.items()
    ]
    accepting = [labels[key] for key in delta if key.members & accepting_labels]

    logger.debug(
        "subset construction: %d nfa states -> %d dfa states%s",
        len(nfa.states), len(labels), " (with sink)" if SINK in labels else "",
    )
    return DFA(
        labels.values(),
        nfa.alphabet,
        transitions,
        labels[start],
        accepting,
        origin={q: key.members for key, q in labels.items()},
    )
