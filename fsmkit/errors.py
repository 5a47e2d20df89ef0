"""
exceptions raised by fsmkit.

all of them are ValueErrors: a bad machine description or a bad input word
is a bad value handed in by the caller.
"""


class FSMError(ValueError):
    pass


class ValidationError(FSMError):
    """components do not form a valid machine (unknown state/symbol, dfa not total, ...)"""


class MalformedEncodingError(FSMError):
    """textual or json description does not follow the grammar"""


class UnknownSymbolError(FSMError):
    """an input word contains a symbol outside the machine's alphabet"""

    def __init__(self, symbol: str, position: int):
        super().__init__(f"symbol {symbol!r} at position {position} is not in the alphabet")
        self.symbol = symbol
        self.position = position
