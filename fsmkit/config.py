"""
module-level settings shared by the codec, the printers and the driver.
"""

# marker used for ε-moves in the textual encoding (never a member of an alphabet)
EPSILON = "e"

# glyphs for human-readable output
EPSILON_GLYPH = "ε"
EMPTY_SET_GLYPH = "∅"
START_MARK = "→"
ACCEPT_MARK = "*"

# delimiters of the textual format; symbols may not use them
SECTION_SEP = "/"
TRANSITION_SEP = ";"
FIELD_SEP = ","
RESERVED_SYMBOLS = frozenset({SECTION_SEP, TRANSITION_SEP, FIELD_SEP})

# tabulate layout for every printed table
TABLE_FORMAT = "github"

# json document read by the driver when --json is given without a path
DEFAULT_INPUT_FILE = "fa_inputs.json"

# ε-nfa converted by the driver when no machine is given ('e' stands for ε)
SAMPLE_ENCODING = (
    "0 1 2 3 /a b e/0 , e, 1; 0, a, 1; 0, b, 2; 1, e, 3; 2, e, 1; "
    "2, a, 2; 2, a, 3; 3, b, 1; 3, b, 3/0/ 1 3"
)
SAMPLE_WORDS = ("", "abbb", "aabbb")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
