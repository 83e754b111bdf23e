from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING, Union

from .derivation import Derivation
from .errors import DuplicateAttributeError, TagMismatchError, XMLSyntaxError, generate_error_message
from .grammar import Nonterminal
from .tokens import Token, end_token

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

StackEntry = Union[Token, Nonterminal]


class ParserContext:
    """Everything one parse call owns: both stacks, semantic state, input.

    ``symbols`` and ``states`` always have the same height apart from the
    initial state, which sits alone at the bottom of ``states``.
    """

    __slots__ = ("attribute_names", "derivation", "lookahead", "remaining", "states", "symbols", "tag_names")

    symbols: list[StackEntry]
    states: list[int]
    tag_names: list[str]
    attribute_names: set[str]
    remaining: deque[Token]
    lookahead: Token
    derivation: Derivation

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.symbols = []
        self.states = [0]
        self.tag_names = []
        self.attribute_names = set()
        self.remaining = deque(tokens)
        self.remaining.append(end_token())
        self.lookahead = self.remaining[0]
        self.derivation = Derivation()

    def __repr__(self) -> str:
        return f"ParserContext(state={self.states[-1] if self.states else None}, lookahead={self.lookahead})"

    @property
    def current_state(self) -> int:
        if not self.states:
            raise self._underflow()
        return self.states[-1]

    @property
    def top_symbol(self) -> StackEntry | None:
        return self.symbols[-1] if self.symbols else None

    # ---------------------
    # Stack machinery
    # ---------------------

    def push(self, symbol: StackEntry, state: int) -> None:
        self.symbols.append(symbol)
        self.states.append(state)

    def pop(self, count: int) -> None:
        if count > len(self.symbols):
            raise self._underflow()
        del self.symbols[-count:]
        del self.states[-count:]

    def advance(self) -> Token:
        """Consume the lookahead and return it."""
        consumed = self.remaining.popleft()
        self.lookahead = self.remaining[0] if self.remaining else end_token()
        return consumed

    # ---------------------
    # Semantic hooks
    # ---------------------

    def open_tag(self, name: Token) -> None:
        self.tag_names.append(name.lexeme)
        logger.debug("encountered start tag %r", name.lexeme)

    def close_tag(self, name: Token) -> None:
        if not self.tag_names:
            raise self._underflow(name)
        expected = self.tag_names.pop()
        if expected != name.lexeme:
            raise TagMismatchError(expected, name.lexeme, line=name.line, column=name.column)
        logger.debug("matched end tag %r", expected)

    def self_close(self, token: Token) -> None:
        if self.tag_names:
            name = self.tag_names.pop()
            logger.debug("closed %r with empty tag, no name matching performed", name)

    def add_attribute(self, name: Token) -> None:
        if name.lexeme in self.attribute_names:
            raise DuplicateAttributeError(name.lexeme, line=name.line, column=name.column)
        self.attribute_names.add(name.lexeme)

    def clear_attributes(self, token: Token) -> None:
        self.attribute_names.clear()

    def _underflow(self, token: Token | None = None) -> XMLSyntaxError:
        token = token or self.lookahead
        return XMLSyntaxError(
            "stack-underflow",
            generate_error_message("stack-underflow"),
            line=token.line,
            column=token.column,
        )
