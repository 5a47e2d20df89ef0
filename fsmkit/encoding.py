"""
textual encoding of machines.

    <states> / <alphabet> / <transitions> / <initial state> / <accepting states>

for example

    0 1/a b/0 , a , 0; 0,b, 1 ;1, a, 0 ; 1, b, 1/0/ 1

is a machine with states 0 and 1 over the alphabet {a, b}, four transitions,
initial state 0 and the single accepting state 1. states are integers,
symbols single characters, transitions are "from, symbol, to" separated by
';'. 'e' stands for ε. whitespace around delimiters does not matter, the
alphabet section may be blank (ε-moves only) and the accepting section may
be left out.
"""

from typing import Dict, List, NamedTuple

from fsmkit.alphabet import Alphabet
from fsmkit.config import FIELD_SEP, SECTION_SEP, TRANSITION_SEP
from fsmkit.dfa import DFA
from fsmkit.errors import MalformedEncodingError, ValidationError
from fsmkit.machine import Machine
from fsmkit.nfa import NFA
from fsmkit.state import State, parse_state_ids
from fsmkit.transitions import Transition


class Description(NamedTuple):
    """decoded components, in constructor order of NFA/DFA"""

    states: List[State]
    alphabet: Alphabet
    transitions: List[Transition]
    initial_state: State
    accepting_states: List[State]


def _lookup(states: Dict[int, State], label: int, role: str) -> State:
    try:
        return states[label]
    except KeyError:
        raise ValidationError(f"{role} refers to unknown state {label}") from None


def _parse_label(text: str) -> int:
    ids = parse_state_ids(text)
    if len(ids) != 1:
        raise MalformedEncodingError(f"expected one state label, got {text!r}")
    return ids[0]


def _parse_transitions(text: str, states: Dict[int, State]) -> List[Transition]:
    transitions: List[Transition] = []
    if not text:
        return transitions
    for item in text.split(TRANSITION_SEP):
        fields = [f.strip() for f in item.split(FIELD_SEP)]
        if len(fields) != 3 or not all(fields):
            raise MalformedEncodingError(f"transition must be 'from, symbol, to': {item.strip()!r}")
        src, symbol, dst = fields
        transitions.append(Transition(
            _lookup(states, _parse_label(src), "transition"),
            symbol,
            _lookup(states, _parse_label(dst), "transition"),
        ))
    return transitions


def decode(text: str) -> Description:
    """
    splits an encoding into its components. grammar violations raise
    MalformedEncodingError, references to unknown states ValidationError.
    symbols are checked when a machine is built from the description.
    """
    sections = [s.strip() for s in text.split(SECTION_SEP)]
    if len(sections) == 4:
        sections.append("")
    if len(sections) != 5:
        raise MalformedEncodingError(
            f"expected 4 or 5 sections separated by {SECTION_SEP!r}, got {len(sections)}"
        )
    states_text, alphabet_text, transitions_text, initial_text, accepting_text = sections

    ids = parse_state_ids(states_text)
    if not ids:
        raise MalformedEncodingError("the states section is empty")
    if len(set(ids)) != len(ids):
        raise ValidationError(f"state labels must be unique: {states_text}")
    states = {i: State(i) for i in ids}

    alphabet = Alphabet.parse(alphabet_text)

    transitions = _parse_transitions(transitions_text, states)

    if not initial_text:
        raise MalformedEncodingError("the initial state section is empty")
    initial = _lookup(states, _parse_label(initial_text), "initial state")

    accepting = [_lookup(states, i, "accepting state") for i in parse_state_ids(accepting_text)]

    return Description(list(states.values()), alphabet, transitions, initial, accepting)


def decode_nfa(text: str) -> NFA:
    return NFA(*decode(text))


def decode_dfa(text: str) -> DFA:
    return DFA(*decode(text))


def encode(machine: Machine) -> str:
    return machine.encode()
