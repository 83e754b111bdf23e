"""Table-driven shift-reduce parser for XML--.

A single generic ``step`` consults :mod:`xmlminus.tables` for the current
state and lookahead and applies the resulting action. Tag-name and
attribute-name bookkeeping runs through named hooks attached to table
entries, so the stepping itself knows nothing about XML.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .context import ParserContext
from .errors import InternalAutomatonError, XMLSyntaxError, generate_error_message
from .grammar import AUGMENTED_START, MAXIMUM_RHS_LENGTH, Nonterminal
from .tables import ACTIONS, Accept, Goto, Hook, Reduce, Shift, expected_kinds, lookup

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .derivation import Derivation
    from .tokens import Token

logger = logging.getLogger(__name__)


class Parser:
    """Deterministic pushdown automaton for the XML-- grammar.

    The parser itself is stateless; every call to :meth:`parse` builds a
    fresh :class:`ParserContext`, so one instance may be reused freely.
    """

    __slots__ = ()

    # _HOOK_HANDLERS is defined at the end of the file
    _HOOK_HANDLERS: dict[Hook, Callable[[ParserContext, Token], None]]

    def parse(self, tokens: Sequence[Token]) -> Derivation:
        """Run the automaton over ``tokens`` until it accepts.

        Raises XMLSyntaxError, TagMismatchError, DuplicateAttributeError or
        InternalAutomatonError; a returned derivation is always accepted.
        """
        context = ParserContext(tokens)
        while True:
            if self.step(context):
                break
        return context.derivation

    def step(self, context: ParserContext) -> bool:
        """Apply one action. Returns True once the document is accepted."""
        state = context.current_state
        if state not in ACTIONS:
            raise InternalAutomatonError(
                "unknown-state",
                generate_error_message("unknown-state", state=state),
            )

        lookahead = context.lookahead
        action = lookup(state, lookahead.kind)

        if isinstance(action, Shift):
            self._run_hook(action.hook, context, lookahead)
            context.push(lookahead, action.state)
            context.advance()
            logger.debug("state %d: shift %s, goto %d", state, lookahead, action.state)
            return False

        if isinstance(action, Reduce):
            self._reduce(context, state, action)
            return False

        if isinstance(action, Accept):
            if context.top_symbol is not Nonterminal.START:
                raise InternalAutomatonError(
                    "unknown-state",
                    generate_error_message("unknown-state", state=state),
                )
            context.derivation.accepted = True
            logger.debug("state %d: accept", state)
            return True

        expected = ", ".join(str(kind) for kind in expected_kinds(state))
        raise XMLSyntaxError(
            "unexpected-token",
            generate_error_message("unexpected-token", state=state, found=lookahead.kind, expected=expected),
            line=lookahead.line,
            column=lookahead.column,
        )

    def _reduce(self, context: ParserContext, state: int, action: Reduce) -> None:
        production = action.production
        lhs = production.lhs
        length = len(production)
        if not isinstance(lhs, Nonterminal) or length > MAXIMUM_RHS_LENGTH:
            raise InternalAutomatonError(
                "invalid-reduction",
                generate_error_message("invalid-reduction", lhs=lhs),
            )

        self._run_hook(action.hook, context, context.lookahead)
        if production is not AUGMENTED_START:
            context.derivation.record(action, state, context.lookahead.kind)

        # Epsilon rules push the nonterminal without popping anything
        if length:
            context.pop(length)

        exposed = context.current_state
        target = lookup(exposed, lhs)
        if not isinstance(target, Goto):
            raise InternalAutomatonError(
                "missing-goto",
                generate_error_message("missing-goto", state=exposed, lhs=lhs),
            )
        context.push(lhs, target.state)
        logger.debug("state %d: reduce %s (%s), goto %d", state, production, action.label, target.state)

    def _run_hook(self, hook: Hook | None, context: ParserContext, token: Token) -> None:
        if hook is not None:
            self._HOOK_HANDLERS[hook](context, token)


Parser._HOOK_HANDLERS = {
    Hook.START_TAG_NAME: ParserContext.open_tag,
    Hook.END_TAG_NAME: ParserContext.close_tag,
    Hook.ATTRIBUTE_NAME: ParserContext.add_attribute,
    Hook.START_TAG_CLOSED: ParserContext.clear_attributes,
    Hook.SELF_CLOSED: ParserContext.self_close,
}


def parse(tokens: Sequence[Token]) -> Derivation:
    return Parser().parse(tokens)
