"""Minimal XMLMinus entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .automaton import Parser
from .encoding import decode_document
from .errors import XMLMinusError
from .serialize import format_derivation
from .tokenizer import Tokenizer, TokenizerOpts

if TYPE_CHECKING:
    from .derivation import Derivation
    from .tokens import Token


class XMLMinus:
    """Validate one XML-- document.

    Construction tokenizes and parses the whole document; any failure is
    raised as an ``XMLMinusError`` subclass, so an instance only exists for
    an accepted document.
    """

    __slots__ = ("debug", "derivation", "document", "encoding", "tokens")

    debug: bool
    document: str
    encoding: str | None
    tokens: list[Token]
    derivation: Derivation

    def __init__(
        self,
        document: str | bytes | bytearray | memoryview,
        *,
        debug: bool = False,
        encoding: str | None = None,
        strict: bool = False,
        tokenizer_opts: TokenizerOpts | None = None,
    ) -> None:
        self.debug = bool(debug)
        self.encoding = None
        if self.debug:
            logging.getLogger("xmlminus").setLevel(logging.DEBUG)

        if isinstance(document, (bytes, bytearray, memoryview)):
            self.document, self.encoding = decode_document(bytes(document), transport_encoding=encoding)
        else:
            self.document = str(document)

        opts = tokenizer_opts or TokenizerOpts(strict=strict)
        self.tokens = Tokenizer(opts).run(self.document)
        try:
            self.derivation = Parser().parse(self.tokens)
        except XMLMinusError as e:
            # Parser errors carry positions but not the text they point into
            if e.source is None:
                e.source = self.document
            raise

    @property
    def accepted(self) -> bool:
        return self.derivation.accepted

    def to_text(self, rightmost: bool = False) -> str:
        """Return the derivation, one ``<label> <production>`` per line."""
        return format_derivation(self.derivation, rightmost=rightmost)


def validate(document: str | bytes, *, strict: bool = False) -> Derivation:
    """Tokenize and parse ``document``, returning its derivation."""
    return XMLMinus(document, strict=strict).derivation
