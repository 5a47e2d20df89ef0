"""
human-readable output: set notation and transition/trace tables.
"""

from typing import Iterable, List, Sequence, Tuple

from tabulate import tabulate

from fsmkit.config import ACCEPT_MARK, EMPTY_SET_GLYPH, EPSILON, EPSILON_GLYPH, START_MARK, TABLE_FORMAT
from fsmkit.state import State, pretty_state_set
from fsmkit.transitions import TransitionFunction

Table = Tuple[List[str], List[List[str]]]


def fmt_set(states: Iterable[State]) -> str:
    return pretty_state_set(states)


def fmt_labels(labels: Iterable[int]) -> str:
    labels = sorted(labels)
    return "{" + ",".join(f"q{x}" for x in labels) + "}" if labels else EMPTY_SET_GLYPH


def fmt_symbol(symbol: str) -> str:
    return EPSILON_GLYPH if symbol == EPSILON else symbol


def mark_state(name: str, is_start: bool, is_acc: bool) -> str:
    prefix = ""
    if is_start:
        prefix += START_MARK
    if is_acc:
        prefix += ACCEPT_MARK
    return f"{prefix}{name}"


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    return tabulate(rows, headers=headers, tablefmt=TABLE_FORMAT,
                    colalign=("left", *("center",) * (len(headers) - 1)))


def print_table(title: str, headers: Sequence[str], rows: Sequence[Sequence[str]]):
    print(f"\n{title}")
    print(format_table(headers, rows))


# =========================================
# machines
# =========================================

def transition_table(machine) -> Table:
    """
    one row per state (start marked →, accepting marked *), one column per
    symbol, an ε column when the machine uses ε, and for a converted dfa the
    nfa states each row stands for.
    """
    symbols = list(machine.alphabet)
    if machine.uses_epsilon():
        symbols.append(EPSILON)
    origin = getattr(machine, "origin", None)
    deterministic = isinstance(machine.transitions, TransitionFunction)

    headers = ["state"] + [fmt_symbol(a) for a in symbols]
    if origin:
        headers.append("nfa states")

    rows: List[List[str]] = []
    for q in sorted(machine.states):
        row = [mark_state(q.pretty(), q == machine.initial_state, machine.is_accepting(q))]
        for a in symbols:
            dests = machine.transitions.at(q, a)
            if not dests:
                row.append("-")
            elif deterministic:
                row.append(next(iter(dests)).pretty())
            else:
                row.append(fmt_set(dests))
        if origin:
            row.append(fmt_labels(origin.get(q, ())))
        rows.append(row)
    return headers, rows


def set_notation(machine) -> str:
    """
    K = {q0, q1}
    Σ = {a, b}
    δ = {(q0, a, q1), ...}
    s = q0
    A = {q1}
    """
    transitions = ", ".join(t.pretty() for t in machine.sorted_transitions())
    return "\n".join((
        f"K = {fmt_set(machine.states)}",
        "Σ = {" + ", ".join(machine.alphabet) + "}",
        f"{machine.transitions.pretty_name} = " + ("{" + transitions + "}" if transitions else EMPTY_SET_GLYPH),
        f"s = {machine.initial_state.pretty()}",
        f"A = {fmt_set(machine.accepting_states)}",
    ))


def trace_table(steps) -> Table:
    """rows for the steps of DFA.run"""
    headers = ["pos", "state", "symbol", "next"]
    rows = [[str(st.position), st.state.pretty(), st.symbol, st.next_state.pretty()] for st in steps]
    return headers, rows
