"""
Pytest configuration and fixtures for fsmkit tests.

Provides the sample machines, a brute-force reference evaluator and a seeded
random NFA generator.
"""

import itertools
import random

import pytest

from fsmkit import NFA, State, Transition, decode_nfa
from fsmkit.config import EPSILON, SAMPLE_ENCODING

# dfa the sample ε-nfa converts to (labels in breadth-first order)
SAMPLE_DFA_ENCODING = "0 1 2 3/a b/0,a,1;0,b,2;1,a,3;1,b,1;2,a,2;2,b,1;3,a,3;3,b,3/0/0 1 2"


@pytest.fixture
def sample_nfa():
    """
    The ε-nfa of the command line demo.

    States 0-3 over {a, b}; ε: 0->1, 1->3, 2->1; initial 0; accepting {1, 3}.
    """
    return decode_nfa(SAMPLE_ENCODING)


@pytest.fixture
def sample_dfa(sample_nfa):
    return sample_nfa.to_dfa()


def brute_force_accepts(nfa, word):
    """
    Explores every (state, position) pair reachable along any path,
    following transitions one by one. Shares no code with NFA.simulate.
    """
    seen = set()
    stack = [(nfa.initial_state, 0)]
    while stack:
        q, i = stack.pop()
        if (q, i) in seen:
            continue
        seen.add((q, i))
        if i == len(word) and q in nfa.accepting_states:
            return True
        for t in nfa.transitions:
            if t.from_state != q:
                continue
            if t.symbol == EPSILON:
                stack.append((t.to_state, i))
            elif i < len(word) and t.symbol == word[i]:
                stack.append((t.to_state, i + 1))
    return False


def all_words(alphabet, max_len):
    for n in range(max_len + 1):
        for letters in itertools.product(list(alphabet), repeat=n):
            yield "".join(letters)


def make_random_nfa(seed, max_states=6, symbols="ab"):
    """A random ε-nfa; labels are spread out and the initial state is random."""
    rng = random.Random(seed)
    n = rng.randint(1, max_states)
    states = [State(label) for label in rng.sample(range(100), n)]
    transitions = set()
    for src in states:
        for dst in states:
            for sym in symbols:
                if rng.random() < 0.2:
                    transitions.add(Transition(src, sym, dst))
            if rng.random() < 0.12:
                transitions.add(Transition(src, EPSILON, dst))
    accepting = [q for q in states if rng.random() < 0.3]
    return NFA(states, symbols, transitions, rng.choice(states), accepting)


@pytest.fixture
def random_nfas():
    """Forty reproducible random ε-nfas."""
    return [make_random_nfa(seed) for seed in range(40)]


@pytest.fixture
def reference_accepts():
    return brute_force_accepts


@pytest.fixture
def words_upto():
    return all_words


@pytest.fixture
def sample_dfa_encoding():
    return SAMPLE_DFA_ENCODING


@pytest.fixture
def nfa_factory():
    return make_random_nfa
