"""
graphviz pictures of machines.
"""

import logging

import graphviz

from fsmkit.pretty import fmt_labels, fmt_symbol

logger = logging.getLogger(__name__)


def to_digraph(machine, comment: str = "finite state machine") -> graphviz.Digraph:
    """
    one node per state (accepting states doubled), an invisible node pointing
    at the initial state, one edge per (from, to) pair labelled with every
    symbol that takes it.
    """
    g = graphviz.Digraph(comment=comment)
    g.attr(rankdir="LR")
    origin = getattr(machine, "origin", None) or {}

    g.node("__start", label="", shape="point")
    for q in sorted(machine.states):
        label = q.pretty()
        if q in origin:
            label += "\\n" + fmt_labels(origin[q])
        shape = "doublecircle" if machine.is_accepting(q) else "circle"
        g.node(q.pretty(), label=label, shape=shape)
    g.edge("__start", machine.initial_state.pretty())

    labels = {}
    for t in machine.sorted_transitions():
        labels.setdefault((t.from_state, t.to_state), []).append(fmt_symbol(t.symbol))
    for (src, dst), symbols in labels.items():
        g.edge(src.pretty(), dst.pretty(), label=",".join(symbols))
    return g


def draw_machine(machine, filename: str, fmt: str = "png"):
    """
    saves filename.dot always and renders filename.<fmt> from it when the
    graphviz executables are installed. returns the path of the picture or None.
    """
    g = to_digraph(machine)
    dot_path = g.save(filename=f"{filename}.dot")
    print(f"[ok] dot file saved: {dot_path}")
    try:
        outpath = graphviz.render("dot", fmt, dot_path, outfile=f"{filename}.{fmt}")
    except graphviz.ExecutableNotFound as e:
        logger.warning("no %s picture, graphviz executables not found: %s", fmt, e)
        return None
    print(f"[ok] picture saved: {outpath}")
    return outpath
