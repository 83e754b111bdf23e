from .automaton import Parser, parse
from .derivation import Derivation, DerivationStep
from .errors import (
    DuplicateAttributeError,
    InternalAutomatonError,
    LexicalError,
    TagMismatchError,
    XMLMinusError,
    XMLSyntaxError,
)
from .grammar import PRODUCTIONS, Nonterminal, Production
from .parser import XMLMinus, validate
from .serialize import GRAMMAR_TEXT, format_derivation, format_table, format_tokens
from .tokenizer import Tokenizer, TokenizerOpts, tokenize
from .tokens import END_MARKER, Token, TokenKind

__all__ = [
    "END_MARKER",
    "GRAMMAR_TEXT",
    "PRODUCTIONS",
    "Derivation",
    "DerivationStep",
    "DuplicateAttributeError",
    "InternalAutomatonError",
    "LexicalError",
    "Nonterminal",
    "Parser",
    "Production",
    "TagMismatchError",
    "Token",
    "TokenKind",
    "Tokenizer",
    "TokenizerOpts",
    "XMLMinus",
    "XMLMinusError",
    "XMLSyntaxError",
    "format_derivation",
    "format_table",
    "format_tokens",
    "parse",
    "tokenize",
    "validate",
]
