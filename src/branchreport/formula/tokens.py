"""Formula tokenizer.

Splits a formula string such as ``"(A - B) / A"`` into classified tokens.
"""

import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Lexical class of a formula token."""

    NUMBER = "number"
    OPERATOR = "operator"
    VARIABLE = "variable"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


# Alternation order is the match priority. Characters outside these
# groups (whitespace included) are skipped by finditer.
TOKEN_PATTERN = re.compile(
    r"(?P<number>[0-9]+\.?[0-9]*)"
    r"|(?P<operator>[+\-*/])"
    r"|(?P<left_paren>\()"
    r"|(?P<right_paren>\))"
    r"|(?P<variable>[A-Za-z_][A-Za-z0-9_]*)"
)


def tokenize(formula: str | None) -> list[Token]:
    """
    Tokenize a formula string.

    Args:
        formula: Formula string; ``None`` or empty input yields no tokens

    Returns:
        Tokens in source order
    """
    if not formula:
        return []

    return [
        Token(TokenKind(match.lastgroup), match.group())
        for match in TOKEN_PATTERN.finditer(formula)
    ]
