"""
flat entry points over the machine classes.
"""

from typing import TypeVar

from fsmkit.dfa import DFA
from fsmkit.encoding import decode, decode_dfa, decode_nfa, encode
from fsmkit.machine import Machine
from fsmkit.nfa import epsilon_closures, nfa_to_dfa

M = TypeVar("M", bound=Machine)

__all__ = [
    "canonicalize",
    "decode",
    "decode_dfa",
    "decode_nfa",
    "encode",
    "epsilon_closures",
    "evaluate",
    "nfa_to_dfa",
    "prune",
]


def evaluate(dfa: DFA, word: str) -> bool:
    return dfa.compute(word)


def prune(machine: M) -> M:
    return machine.remove_unreachable_states()


def canonicalize(machine: M) -> M:
    return machine.to_canonic_form()
