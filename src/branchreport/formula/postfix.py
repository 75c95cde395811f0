"""Infix to postfix conversion for formulas.

Variables are resolved to numbers first, then the shunting-yard algorithm
reorders the tokens into Reverse Polish notation.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from branchreport.core.exceptions import FormulaSyntaxError
from branchreport.formula.tokens import Token, TokenKind

# Equal precedence pops first, which makes every operator left-associative.
PRECEDENCE: dict[str, int] = {"+": 1, "-": 1, "*": 2, "/": 2}


def resolve_variables(
    tokens: Sequence[Token],
    values: Mapping[str, Any] | None,
) -> list[Token]:
    """
    Replace variable tokens with number tokens.

    Variables missing from ``values`` (or mapped to ``None``) become 0, so a
    field that has not been filled in yet counts as zero.

    Args:
        tokens: Tokens from ``tokenize``
        values: Field key to numeric value

    Returns:
        New token list without variable tokens
    """
    values = values or {}
    resolved: list[Token] = []

    for token in tokens:
        if token.kind is TokenKind.VARIABLE:
            value = values.get(token.text)
            number = 0.0 if value is None else float(value)
            resolved.append(Token(TokenKind.NUMBER, repr(number)))
        else:
            resolved.append(token)

    return resolved


def to_postfix(tokens: Sequence[Token], formula: str = "") -> list[Token]:
    """
    Convert infix tokens to postfix order (shunting-yard).

    Args:
        tokens: Resolved tokens (numbers, operators, parentheses)
        formula: Source formula, used in error messages

    Returns:
        Postfix tokens; parentheses never appear in the output

    Raises:
        FormulaSyntaxError: On unbalanced parentheses or a leftover variable
    """
    output: list[Token] = []
    ops: list[Token] = []

    for token in tokens:
        if token.kind is TokenKind.NUMBER:
            output.append(token)

        elif token.kind is TokenKind.OPERATOR:
            while (
                ops
                and ops[-1].kind is TokenKind.OPERATOR
                and PRECEDENCE[ops[-1].text] >= PRECEDENCE[token.text]
            ):
                output.append(ops.pop())
            ops.append(token)

        elif token.kind is TokenKind.LEFT_PAREN:
            ops.append(token)

        elif token.kind is TokenKind.RIGHT_PAREN:
            while ops and ops[-1].kind is not TokenKind.LEFT_PAREN:
                output.append(ops.pop())
            if not ops:
                raise FormulaSyntaxError(formula, "Unmatched ')'")
            ops.pop()

        else:
            raise FormulaSyntaxError(formula, f"Unresolved variable: {token.text}")

    while ops:
        token = ops.pop()
        if token.kind is TokenKind.LEFT_PAREN:
            raise FormulaSyntaxError(formula, "Unmatched '('")
        output.append(token)

    return output
