"""Centralized error definitions for XML-- validation.

Every failure raised by the tokenizer or the parser automaton is an
``XMLMinusError`` subclass carrying a kebab-case ``code``, a human-readable
``message`` and, where known, the 1-based ``line`` and ``column`` of the
offending input.
"""

from __future__ import annotations

from typing import Any


def generate_error_message(code: str, **details: Any) -> str:
    """Generate human-readable error message from error code.

    Args:
        code: The error code string (kebab-case format)
        details: Values interpolated into the message (tag names, states, ...)

    Returns:
        Human-readable error message string
    """
    expected = details.get("expected")
    found = details.get("found")
    messages = {
        # ================================================================
        # TOKENIZER ERRORS
        # ================================================================
        "empty-document": "Failed to scan the document. It may be empty or nonexistent.",
        "reserved-end-marker": "Illegal EOF symbol '&$' found in document",
        "unexpected-character": f"Unexpected character {found!r}",
        # ================================================================
        # PARSER ERRORS
        # ================================================================
        "unexpected-token": (
            f"Unexpected {found} in state {details.get('state')}"
            + (f" (expected {expected})" if expected else "")
        ),
        "stack-underflow": "A syntax error has caused a stack underflow",
        "end-tag-mismatch": f"End tag name mismatch: expected {expected!r} but found {found!r}",
        "duplicate-attribute": f"Duplicate attribute name {found!r} within current tag",
        # ================================================================
        # AUTOMATON ERRORS
        # ================================================================
        "unknown-state": f"Unrecognized parser state {details.get('state')!r}",
        "invalid-reduction": f"No such grammar rule for {details.get('lhs')!r}",
        "missing-goto": f"No GOTO entry for state {details.get('state')} on {details.get('lhs')!r}",
    }

    # Return message or fall back to the code itself if not found
    return messages.get(code, code)


class XMLMinusError(Exception):
    """Base class of every validation failure."""

    code: str
    message: str
    line: int | None
    column: int | None
    source: str | None

    def __init__(
        self,
        code: str,
        message: str | None = None,
        *,
        line: int | None = None,
        column: int | None = None,
        source: str | None = None,
    ) -> None:
        self.code = code
        self.message = message or code
        self.line = line
        self.column = column
        self.source = source
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is not None and self.column is not None:
            if self.message != self.code:
                return f"({self.line},{self.column}): {self.code} - {self.message}"
            return f"({self.line},{self.column}): {self.code}"
        if self.message != self.code:
            return f"{self.code} - {self.message}"
        return self.code

    def __repr__(self) -> str:
        if self.line is not None and self.column is not None:
            return f"{type(self).__name__}({self.code!r}, line={self.line}, column={self.column})"
        return f"{type(self).__name__}({self.code!r})"

    def as_exception(self) -> SyntaxError:
        """Convert to a builtin SyntaxError with source highlighting.

        Falls back to a bare SyntaxError when the location or the document
        text is unknown.
        """
        exc = SyntaxError(self.message)
        exc.msg = self.message
        if self.line is None or self.column is None or not self.source:
            return exc

        lines = self.source.split("\n")
        if self.line < 1 or self.line > len(lines):
            return exc

        exc.filename = "<xml-->"
        exc.lineno = self.line
        exc.offset = self.column
        exc.text = lines[self.line - 1]
        return exc


class LexicalError(XMLMinusError):
    """The document could not be tokenized."""


class XMLSyntaxError(XMLMinusError):
    """No shift, reduce or accept action applies, or a stack underflowed."""


class TagMismatchError(XMLMinusError):
    """An end tag does not carry the name of the element it closes."""

    expected: str
    found: str

    def __init__(self, expected: str, found: str, **kwargs: Any) -> None:
        self.expected = expected
        self.found = found
        message = generate_error_message("end-tag-mismatch", expected=expected, found=found)
        super().__init__("end-tag-mismatch", message, **kwargs)


class DuplicateAttributeError(XMLMinusError):
    """Two attributes of one start tag share a name."""

    name: str

    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name
        message = generate_error_message("duplicate-attribute", found=name)
        super().__init__("duplicate-attribute", message, **kwargs)


class InternalAutomatonError(XMLMinusError):
    """The parse tables are inconsistent; never caused by user input."""
