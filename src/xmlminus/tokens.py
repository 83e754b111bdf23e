from __future__ import annotations

import enum
from dataclasses import dataclass, field

# Lexeme of the synthetic terminator; must never occur in a real document.
END_MARKER = "&$"


class TokenKind(enum.Enum):
    NAME = "NAME"
    STRING = "STRING"
    DATA = "DATA"
    OPEN = "OPEN"
    CLOSE = "CLOSE"
    LTSL = "LTSL"
    SLGT = "SLGT"
    ASSIGN = "ASSIGN"
    COMMENT = "COMMENT"
    END = "END"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Token:
    """A recognized token.

    Only ``kind`` and ``lexeme`` take part in equality; ``line`` and
    ``column`` (1-based) are kept for error reporting.
    """

    kind: TokenKind
    lexeme: str
    line: int | None = field(default=None, compare=False)
    column: int | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.kind} {self.lexeme}"


def end_token(line: int | None = None, column: int | None = None) -> Token:
    return Token(TokenKind.END, END_MARKER, line, column)
