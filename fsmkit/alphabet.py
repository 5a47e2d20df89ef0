from typing import Iterable, Iterator, Tuple

from fsmkit.config import EPSILON, RESERVED_SYMBOLS
from fsmkit.errors import ValidationError


class Alphabet:
    """
    ordered, duplicate-free set of input symbols.

    every symbol is one character. the ε marker is never a member: it exists
    only as a transition label, see with_epsilon().
    """

    EPSILON = EPSILON

    __slots__ = ("_symbols", "_index")

    def __init__(self, symbols: Iterable[str]):
        symbols = tuple(symbols)
        for sym in symbols:
            if not isinstance(sym, str) or len(sym) != 1:
                raise ValidationError(f"symbol must be a single character: {sym!r}")
            if sym == EPSILON:
                raise ValidationError(f"the epsilon marker {EPSILON!r} cannot be an alphabet symbol")
            if sym.isspace() or sym in RESERVED_SYMBOLS:
                raise ValidationError(f"symbol {sym!r} is reserved by the encoding")
        if len(set(symbols)) != len(symbols):
            raise ValidationError(f"alphabet symbols must be unique: {' '.join(symbols)}")
        self._symbols: Tuple[str, ...] = symbols
        self._index = {sym: i for i, sym in enumerate(symbols)}

    # ---------- parsing / encoding ----------
    @classmethod
    def parse(cls, text: str) -> "Alphabet":
        """
        whitespace separated symbols; a listed ε marker is dropped.
        """
        return cls(sym for sym in text.split() if sym != EPSILON)

    def encode(self) -> str:
        return " ".join(self._symbols)

    # ---------- queries ----------
    @property
    def symbols(self) -> Tuple[str, ...]:
        return self._symbols

    def with_epsilon(self) -> Tuple[str, ...]:
        """symbols in order followed by the ε marker"""
        return self._symbols + (EPSILON,)

    def position(self, symbol: str) -> int:
        """
        sort key for symbols: alphabet order, ε after every real symbol.
        """
        if symbol == EPSILON:
            return len(self._symbols)
        return self._index[symbol]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"Alphabet({list(self._symbols)!r})"
