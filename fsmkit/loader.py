"""
machines from json documents:

    {"automaton": {"type": "E-NFA",
                   "states": [0, 1, 2], "alphabet": ["a", "b"],
                   "start": 0, "accepts": [2],
                   "transitions": {"0": {"a": [1], "ε": 2}, "1": {"b": [2]}}}}

destinations may be one label or a list of labels; ε-moves may be keyed
with 'ε' or with the 'e' marker of the textual encoding.
"""

import json
import logging
from typing import Any, Dict, List, Union

from fsmkit.alphabet import Alphabet
from fsmkit.config import EPSILON, EPSILON_GLYPH
from fsmkit.dfa import DFA
from fsmkit.errors import MalformedEncodingError, ValidationError
from fsmkit.nfa import NFA
from fsmkit.state import State
from fsmkit.transitions import Transition

logger = logging.getLogger(__name__)

DFA_TYPES = {"DFA"}
NFA_TYPES = {"NFA", "E-NFA", "ENFA", "EPSILON-NFA", "EPSILON_NFA"}


def ensure_list(x):
    return x if isinstance(x, list) else [x]


def _label(value: Any) -> int:
    if isinstance(value, bool):
        raise MalformedEncodingError(f"state label is not an integer: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise MalformedEncodingError(f"state label is not an integer: {value!r}") from None


def _state(states: Dict[int, State], value: Any) -> State:
    label = _label(value)
    if label not in states:
        raise ValidationError(f"unknown state {label}")
    return states[label]


def machine_from_dict(obj: Dict[str, Any]) -> Union[NFA, DFA]:
    """builds the machine described by the "automaton" object"""
    try:
        kind = str(obj["type"]).strip().upper()
        labels = [_label(x) for x in obj["states"]]
        symbols = [str(a) for a in obj["alphabet"] if a not in (EPSILON, EPSILON_GLYPH)]
        start = obj["start"]
        accepts = obj.get("accepts", [])
        rows = obj.get("transitions", {})
    except (KeyError, TypeError) as e:
        raise MalformedEncodingError(f"bad automaton object: {e!r}") from None

    if kind in DFA_TYPES:
        cls = DFA
    elif kind in NFA_TYPES:
        cls = NFA
    else:
        raise MalformedEncodingError(f"type must be DFA, NFA or E-NFA, got {kind!r}")
    if not isinstance(rows, dict):
        raise MalformedEncodingError("transitions must be an object: state -> symbol -> destinations")

    if len(set(labels)) != len(labels):
        raise ValidationError("state labels must be unique")
    states = {i: State(i) for i in labels}

    transitions: List[Transition] = []
    for src, row in rows.items():
        if not isinstance(row, dict):
            raise MalformedEncodingError(f"transitions of state {src!r} must be an object")
        for sym, dests in row.items():
            sym = EPSILON if sym == EPSILON_GLYPH else sym
            for dst in ensure_list(dests):
                transitions.append(Transition(_state(states, src), sym, _state(states, dst)))

    machine = cls(
        states.values(),
        Alphabet(symbols),
        transitions,
        _state(states, start),
        [_state(states, x) for x in ensure_list(accepts)],
    )
    logger.debug("loaded %s with %d states", kind, len(states))
    return machine


def load_machine(path: str) -> Union[NFA, DFA]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedEncodingError(f"{path}: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("automaton"), dict):
        raise MalformedEncodingError(f"{path}: expected an object with an 'automaton' key")
    return machine_from_dict(data["automaton"])
