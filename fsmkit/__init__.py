"""
finite state machines: nfa (with ε-moves) to dfa by subset construction.
"""

from fsmkit.alphabet import Alphabet
from fsmkit.api import canonicalize, evaluate, prune
from fsmkit.dfa import DFA, Step
from fsmkit.encoding import decode, decode_dfa, decode_nfa, encode
from fsmkit.errors import FSMError, MalformedEncodingError, UnknownSymbolError, ValidationError
from fsmkit.nfa import NFA, epsilon_closures, nfa_to_dfa
from fsmkit.state import State
from fsmkit.transitions import Transition

__version__ = "0.1.0"

__all__ = [
    "Alphabet",
    "DFA",
    "FSMError",
    "MalformedEncodingError",
    "NFA",
    "State",
    "Step",
    "Transition",
    "UnknownSymbolError",
    "ValidationError",
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
