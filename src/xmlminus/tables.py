"""ACTION and GOTO tables of the canonical LR(1) automaton for XML--.

States 1-3, 5, 8, 9, 15 and 24 belong to the document element and only ever
reduce on END; their counterparts 16, 18, 21, 25, 26, 29 and 32 handle nested
elements and reduce on whatever may follow an element inside content.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from .grammar import PRODUCTIONS, Nonterminal, Production
from .tokens import TokenKind


class Hook(enum.Enum):
    """Recognition points at which the automaton runs a semantic check."""

    START_TAG_NAME = "start-tag-name"
    END_TAG_NAME = "end-tag-name"
    ATTRIBUTE_NAME = "attribute-name"
    START_TAG_CLOSED = "start-tag-closed"
    SELF_CLOSED = "self-closed"


@dataclass(frozen=True, slots=True)
class Shift:
    state: int
    hook: Hook | None = None


@dataclass(frozen=True, slots=True)
class Reduce:
    production: Production
    label: str
    hook: Hook | None = None


@dataclass(frozen=True, slots=True)
class Goto:
    state: int


@dataclass(frozen=True, slots=True)
class Accept:
    pass


@dataclass(frozen=True, slots=True)
class Error:
    pass


Action = Union[Shift, Reduce, Goto, Accept, Error]

ACCEPT = Accept()
ERROR = Error()

_T = TokenKind
_N = Nonterminal

# Lookaheads that may follow a reducible handle, in the order the alternatives
# of each reducing state are numbered.
_AT_END = (_T.END,)
_IN_TAG = (_T.CLOSE, _T.NAME, _T.SLGT)
_IN_CONTENT = (_T.LTSL, _T.DATA, _T.OPEN)


def _reduces(
    state: int,
    production: int,
    lookaheads: tuple[TokenKind, ...],
    hook: Hook | None = None,
) -> dict[TokenKind, Action]:
    return {
        kind: Reduce(PRODUCTIONS[production], f"{state}.{alternative}", hook)
        for alternative, kind in enumerate(lookaheads, 1)
    }


ACTIONS: dict[int, dict[TokenKind, Action]] = {
    0: {_T.OPEN: Shift(4)},
    1: _reduces(1, 1, _AT_END),
    2: _reduces(2, 0, _AT_END),
    3: {_T.END: ACCEPT},
    4: {_T.NAME: Shift(6, Hook.START_TAG_NAME)},
    5: _reduces(5, 2, _AT_END),
    6: _reduces(6, 5, _IN_TAG),
    7: {
        _T.CLOSE: Shift(11, Hook.START_TAG_CLOSED),
        _T.NAME: Shift(10, Hook.ATTRIBUTE_NAME),
        _T.SLGT: Shift(9, Hook.START_TAG_CLOSED),
    },
    8: _reduces(8, 3, _AT_END),
    9: _reduces(9, 7, _AT_END, Hook.SELF_CLOSED),
    10: {_T.ASSIGN: Shift(13)},
    11: _reduces(11, 10, _IN_CONTENT),
    12: {_T.LTSL: Shift(19), _T.DATA: Shift(18), _T.OPEN: Shift(17)},
    13: {_T.STRING: Shift(14)},
    14: _reduces(14, 4, _IN_TAG),
    15: _reduces(15, 6, _AT_END),
    16: _reduces(16, 8, _IN_CONTENT),
    17: {_T.NAME: Shift(22, Hook.START_TAG_NAME)},
    18: _reduces(18, 9, _IN_CONTENT),
    19: {_T.NAME: Shift(20, Hook.END_TAG_NAME)},
    20: {_T.CLOSE: Shift(24)},
    21: _reduces(21, 2, _IN_CONTENT),
    22: _reduces(22, 5, _IN_TAG),
    23: {
        _T.CLOSE: Shift(27, Hook.START_TAG_CLOSED),
        _T.NAME: Shift(10, Hook.ATTRIBUTE_NAME),
        _T.SLGT: Shift(26, Hook.START_TAG_CLOSED),
    },
    24: _reduces(24, 11, _AT_END),
    25: _reduces(25, 3, _IN_CONTENT),
    26: _reduces(26, 7, _IN_CONTENT, Hook.SELF_CLOSED),
    27: _reduces(27, 10, _IN_CONTENT),
    28: {_T.LTSL: Shift(30), _T.DATA: Shift(18), _T.OPEN: Shift(17)},
    29: _reduces(29, 6, _IN_CONTENT),
    30: {_T.NAME: Shift(31, Hook.END_TAG_NAME)},
    31: {_T.CLOSE: Shift(32)},
    32: _reduces(32, 11, _IN_CONTENT),
}

GOTOS: dict[int, dict[Nonterminal, int]] = {
    0: {_N.START: 3, _N.DOCUMENT: 2, _N.ELEMENT: 1},
    4: {_N.ELEMENT_PREFIX: 5},
    6: {_N.ATTRIBUTE: 7},
    7: {_N.ELEMENT_SUFFIX: 8},
    11: {_N.ELEMENT_OR_DATA: 12},
    12: {_N.ELEMENT: 16, _N.END_TAG: 15},
    17: {_N.ELEMENT_PREFIX: 21},
    22: {_N.ATTRIBUTE: 23},
    23: {_N.ELEMENT_SUFFIX: 25},
    27: {_N.ELEMENT_OR_DATA: 28},
    28: {_N.ELEMENT: 16, _N.END_TAG: 29},
}

STATE_COUNT = len(ACTIONS)


def lookup(state: int, symbol: TokenKind | Nonterminal) -> Action:
    """Return the table entry for ``state`` on a terminal or nonterminal.

    Terminals yield Shift, Reduce or Accept; nonterminals yield Goto.
    Anything absent from the tables is ERROR.
    """
    if isinstance(symbol, Nonterminal):
        target = GOTOS.get(state, {}).get(symbol)
        return ERROR if target is None else Goto(target)
    return ACTIONS.get(state, {}).get(symbol, ERROR)


def expected_kinds(state: int) -> list[TokenKind]:
    return list(ACTIONS.get(state, {}))
