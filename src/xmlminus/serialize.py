"""Text renderings of tokens, derivations and the parse tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .grammar import PRODUCTIONS, Nonterminal
from .tables import ACTIONS, GOTOS, Accept, Reduce, Shift
from .tokens import TokenKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .derivation import Derivation
    from .tables import Action
    from .tokens import Token

GRAMMAR_TEXT = (
    "\n".join(str(production) for production in PRODUCTIONS)
    + "\n\n* The grammar is left-recursive LR(1).\n"
    + "** S' is a special augmented start rule (not printed in the final derivation).\n"
)

# Terminals as table columns; COMMENT never reaches the parser.
_TABLE_TERMINALS = [kind for kind in TokenKind if kind is not TokenKind.COMMENT]


def format_tokens(tokens: Iterable[Token]) -> str:
    return "\n".join(str(token) for token in tokens)


def format_derivation(derivation: Derivation, rightmost: bool = False) -> str:
    """One ``<label> <production>`` line per reduction.

    With ``rightmost`` the steps are listed from the start symbol down,
    otherwise in the order the parser applied them.
    """
    steps = derivation.rightmost() if rightmost else derivation.steps
    return "\n".join(str(step) for step in steps)


def _format_action(action: Action | None) -> str:
    if isinstance(action, Shift):
        return f"s{action.state}"
    if isinstance(action, Reduce):
        return f"r{action.production.index}"
    if isinstance(action, Accept):
        return "acc"
    return ""


def format_table() -> str:
    """Format the ACTION and GOTO tables as one aligned grid."""
    nonterminals = list(Nonterminal)
    header = "state | {terms} | {nts}".format(
        terms=" ".join(f"{kind.value: <6}" for kind in _TABLE_TERMINALS),
        nts=" ".join(f"{nt.value: <13}" for nt in nonterminals),
    )
    lines = [header, "-" * len(header)]
    for state in sorted(ACTIONS):
        actions = ACTIONS[state]
        gotos = GOTOS.get(state, {})
        lines.append(
            "{state: <5} | {actions} | {gotos}".format(
                state=state,
                actions=" ".join(f"{_format_action(actions.get(kind)): <6}" for kind in _TABLE_TERMINALS),
                gotos=" ".join(f"{gotos.get(nt, ''): <13}" for nt in nonterminals),
            ).rstrip()
        )
    return "\n".join(lines)
