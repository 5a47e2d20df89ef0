"""
driver: decode a machine, convert it to a dfa and run a few words.

    python -m fsmkit                      # the sample ε-nfa, words "", abbb, aabbb
    python -m fsmkit "0 1/a/0,a,1;1,a,0/0/1" -w aa -w aaa --tables
    python -m fsmkit --json fa_inputs.json -w ab --draw dfa
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from fsmkit import config
from fsmkit.dfa import DFA
from fsmkit.draw import draw_machine
from fsmkit.encoding import decode_dfa, decode_nfa
from fsmkit.errors import FSMError
from fsmkit.loader import load_machine
from fsmkit.machine import Machine
from fsmkit.nfa import NFA
from fsmkit.pretty import print_table, trace_table

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fsmkit",
        description="convert a non-deterministic finite state machine to a deterministic one",
    )
    parser.add_argument("encoding", nargs="?",
                        help="machine as 'states/alphabet/transitions/initial/accepting' (default: a sample ε-nfa)")
    parser.add_argument("--json", nargs="?", const=config.DEFAULT_INPUT_FILE, metavar="FILE",
                        help=f"read the machine from a json document (default file: {config.DEFAULT_INPUT_FILE})")
    parser.add_argument("--dfa", action="store_true",
                        help="decode the encoding as a deterministic machine")
    parser.add_argument("-w", "--word", action="append", dest="words", metavar="WORD",
                        help="word to run, may be repeated")
    parser.add_argument("--tables", action="store_true",
                        help="print both machines, their transition tables and a trace per word")
    parser.add_argument("--draw", metavar="BASENAME",
                        help="write a graphviz picture of the dfa")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def load_source(args: argparse.Namespace) -> Machine:
    if args.json:
        return load_machine(args.json)
    encoding = args.encoding or config.SAMPLE_ENCODING
    return decode_dfa(encoding) if args.dfa else decode_nfa(encoding)


def print_machine(title: str, machine: Machine):
    print(f"\n{title}")
    machine.pretty_print()
    headers, rows = machine.transition_table()
    print_table(f"transition table: {title}", headers, rows)


def run_words(source: Machine, dfa: DFA, words: Sequence[str], tables: bool):
    for word in words:
        verdict = dfa.compute(word)
        if not tables:
            print(verdict)
            continue

        shown = repr(word) if word else "ε"
        print(f"\nresult for {shown}: {'accepted' if verdict else 'rejected'}")
        steps = dfa.run(word)
        if steps:
            headers, rows = trace_table(steps)
            print_table(f"trace of {shown}", headers, rows)
        if isinstance(source, NFA):
            direct = source.simulate(word)
            print("cross-check: " + ("verdicts match" if direct == verdict else "verdicts DIFFER"))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.json and args.encoding:
        parser.error("give either an encoding or --json, not both")
    if args.json and args.dfa:
        parser.error("--dfa applies to an encoding; the json document names its own type")
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format=config.LOG_FORMAT)
    words = args.words if args.words is not None else list(config.SAMPLE_WORDS)

    try:
        source = load_source(args)
        logger.debug("source machine: %s", source.encode())
        dfa = source if isinstance(source, DFA) else source.to_dfa()

        if args.tables:
            print_machine("source machine", source)
            if dfa is not source:
                print_machine("equivalent dfa", dfa)

        run_words(source, dfa, words, args.tables)

        if args.draw:
            draw_machine(dfa, args.draw)
    except (FSMError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
