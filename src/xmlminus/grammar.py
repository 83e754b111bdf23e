"""The fixed XML-- grammar.

The grammar is left-recursive LR(1)::

    S'            ::= document
    document      ::= element
    element       ::= < elementPrefix
    elementPrefix ::= NAME attribute elementSuffix
    attribute     ::= attribute NAME = STRING | EPSILON
    elementSuffix ::= > elementOrData endTag | />
    elementOrData ::= elementOrData element | elementOrData DATA | EPSILON
    endTag        ::= </ NAME >
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from .tokens import TokenKind

# Longest right-hand side of any production.
MAXIMUM_RHS_LENGTH = 4

_TERMINAL_TEXT = {
    TokenKind.OPEN: "<",
    TokenKind.CLOSE: ">",
    TokenKind.LTSL: "</",
    TokenKind.SLGT: "/>",
    TokenKind.ASSIGN: "=",
}


class Nonterminal(enum.Enum):
    START = "S'"
    DOCUMENT = "document"
    ELEMENT = "element"
    ELEMENT_PREFIX = "elementPrefix"
    ATTRIBUTE = "attribute"
    ELEMENT_SUFFIX = "elementSuffix"
    ELEMENT_OR_DATA = "elementOrData"
    END_TAG = "endTag"

    def __str__(self) -> str:
        return self.value


Symbol = Union[TokenKind, Nonterminal]


def symbol_text(symbol: Symbol) -> str:
    """Spelling of a grammar symbol as it appears in a production."""
    if isinstance(symbol, TokenKind):
        return _TERMINAL_TEXT.get(symbol, symbol.value)
    return symbol.value


@dataclass(frozen=True, slots=True)
class Production:
    index: int
    lhs: Nonterminal
    rhs: tuple[Symbol, ...]

    @property
    def is_epsilon(self) -> bool:
        return not self.rhs

    def __len__(self) -> int:
        return len(self.rhs)

    def __str__(self) -> str:
        rhs = " ".join(symbol_text(symbol) for symbol in self.rhs) or "EPSILON"
        return f"{self.lhs} ::= {rhs}"


_N = Nonterminal
_T = TokenKind

PRODUCTIONS: tuple[Production, ...] = (
    Production(0, _N.START, (_N.DOCUMENT,)),
    Production(1, _N.DOCUMENT, (_N.ELEMENT,)),
    Production(2, _N.ELEMENT, (_T.OPEN, _N.ELEMENT_PREFIX)),
    Production(3, _N.ELEMENT_PREFIX, (_T.NAME, _N.ATTRIBUTE, _N.ELEMENT_SUFFIX)),
    Production(4, _N.ATTRIBUTE, (_N.ATTRIBUTE, _T.NAME, _T.ASSIGN, _T.STRING)),
    Production(5, _N.ATTRIBUTE, ()),
    Production(6, _N.ELEMENT_SUFFIX, (_T.CLOSE, _N.ELEMENT_OR_DATA, _N.END_TAG)),
    Production(7, _N.ELEMENT_SUFFIX, (_T.SLGT,)),
    Production(8, _N.ELEMENT_OR_DATA, (_N.ELEMENT_OR_DATA, _N.ELEMENT)),
    Production(9, _N.ELEMENT_OR_DATA, (_N.ELEMENT_OR_DATA, _T.DATA)),
    Production(10, _N.ELEMENT_OR_DATA, ()),
    Production(11, _N.END_TAG, (_T.LTSL, _T.NAME, _T.CLOSE)),
)

AUGMENTED_START = PRODUCTIONS[0]
