from __future__ import annotations

import logging
import re
from bisect import bisect_right
from typing import NoReturn

from .errors import LexicalError, generate_error_message
from .tokens import END_MARKER, Token, TokenKind

logger = logging.getLogger(__name__)

_INITIAL = r"[A-Za-z_:]"
_OTHER = r"[A-Za-z_:.\-0-9]"
_ORDINARY = r"""[^<>"'&]"""
_SPECIAL = r"&lt;|&gt;|&quot;|&apos;|&amp;"
_REFERENCE = r"&#[0-9]+;|&#x[0-9a-fA-F]+;"
_CHAR = f"(?:{_ORDINARY}|{_SPECIAL}|{_REFERENCE})"

# Alternatives in priority order. re tries them left to right at a position
# and the first one that matches wins, even when a later one is longer.
_TOKEN_PATTERNS = (
    ("COMMENT", r"<!--.*?-->"),
    ("NAME", rf"(?<!>){_INITIAL}{_OTHER}*"),
    ("STRING", rf""""(?:{_CHAR}|')*"|'(?:{_CHAR}|")*'"""),
    ("DATA", rf"(?<=>){_CHAR}+(?<!=)"),
    ("OPEN", r"</?(?!!)"),
    ("CLOSE", r"/?(?<!-)>"),
    ("ASSIGN", r"(?<!=)="),
)
_TOKEN_PATTERN = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS),
    re.DOTALL,
)

_WHITESPACE_PATTERN = re.compile(r"[ \t\n\r]+")
_DATA_FRAGMENT_PATTERN = re.compile(r"[^ \t\n\r]+")


class TokenizerOpts:
    __slots__ = ("discard_bom", "strict")

    strict: bool
    discard_bom: bool

    def __init__(self, strict: bool = False, discard_bom: bool = True) -> None:
        self.strict = bool(strict)
        self.discard_bom = bool(discard_bom)


class Tokenizer:
    """Regex-driven scanner turning an XML-- document into a token list.

    The whole document is scanned up front; the parser never calls back into
    the tokenizer. Comments and whitespace outside character data produce no
    tokens.
    """

    __slots__ = ("_newline_positions", "buffer", "length", "opts", "pos", "tokens")

    opts: TokenizerOpts
    buffer: str
    length: int
    pos: int
    tokens: list[Token]
    _newline_positions: list[int]

    def __init__(self, opts: TokenizerOpts | None = None) -> None:
        self.opts = opts or TokenizerOpts()
        self.buffer = ""
        self.length = 0
        self.pos = 0
        self.tokens = []
        self._newline_positions = []

    def initialize(self, document: str) -> None:
        if document and document[0] == "\ufeff" and self.opts.discard_bom:
            document = document[1:]

        self.buffer = document or ""
        self.length = len(self.buffer)
        self.pos = 0
        self.tokens = []

        # Pre-compute newline positions for O(log n) line lookups
        self._newline_positions = []
        pos = -1
        buffer = self.buffer
        while True:
            pos = buffer.find("\n", pos + 1)
            if pos == -1:
                break
            self._newline_positions.append(pos)

        if not self.buffer:
            self._error("empty-document")

        marker = self.buffer.find(END_MARKER)
        if marker != -1:
            self._error("reserved-end-marker", marker)

    def run(self, document: str) -> list[Token]:
        self.initialize(document)
        while True:
            if self.step():
                break
        return self.tokens

    def step(self) -> bool:
        """Consume one token, comment, whitespace run or stray character.

        Returns True once the end of the document is reached.
        """
        pos = self.pos
        if pos >= self.length:
            return True

        buffer = self.buffer
        match = _TOKEN_PATTERN.match(buffer, pos)
        if match is None:
            whitespace = _WHITESPACE_PATTERN.match(buffer, pos)
            if whitespace is not None:
                self.pos = whitespace.end()
                return False
            self._unexpected_character(pos)
            self.pos = pos + 1
            return False

        self.pos = match.end()
        group = match.lastgroup
        text = match.group()

        if group == "COMMENT":
            return False

        if group == "DATA":
            # Character data is split into one token per whitespace-free run
            for fragment in _DATA_FRAGMENT_PATTERN.finditer(text):
                self._emit(TokenKind.DATA, fragment.group(), pos + fragment.start())
            return False

        if group == "OPEN":
            kind = TokenKind.LTSL if text == "</" else TokenKind.OPEN
        elif group == "CLOSE":
            kind = TokenKind.SLGT if text == "/>" else TokenKind.CLOSE
        else:
            kind = TokenKind[group]
        self._emit(kind, text, pos)
        return False

    # ---------------------
    # Helpers
    # ---------------------

    def _get_line_at_pos(self, pos: int) -> int:
        """Get line number (1-indexed) for a position using binary search."""
        return bisect_right(self._newline_positions, pos - 1) + 1

    def _location(self, pos: int) -> tuple[int, int]:
        line = self._get_line_at_pos(pos)
        if line == 1:
            return line, pos + 1
        return line, pos - self._newline_positions[line - 2]

    def _emit(self, kind: TokenKind, lexeme: str, pos: int) -> None:
        line, column = self._location(pos)
        self.tokens.append(Token(kind, lexeme, line, column))

    def _unexpected_character(self, pos: int) -> None:
        char = self.buffer[pos]
        if self.opts.strict:
            self._error("unexpected-character", pos, found=char)
        line, column = self._location(pos)
        logger.debug("skipping unexpected character %r at (%d,%d)", char, line, column)

    def _error(self, code: str, pos: int | None = None, **details: object) -> NoReturn:
        message = generate_error_message(code, **details)
        if pos is None:
            raise LexicalError(code, message)
        line, column = self._location(pos)
        raise LexicalError(code, message, line=line, column=column, source=self.buffer)


def tokenize(document: str, *, strict: bool = False) -> list[Token]:
    """Tokenize a whole XML-- document.

    Raises LexicalError for an empty document, for the reserved end marker
    anywhere in the text and, with ``strict``, for characters that start no
    token.
    """
    return Tokenizer(TokenizerOpts(strict=strict)).run(document)
