"""Formula variable validation.

Checks at authoring time that a formula only references known field keys.
"""

from collections.abc import Collection
from dataclasses import dataclass

from branchreport.formula.tokens import TokenKind, tokenize


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of a formula variable check."""

    valid: bool
    error: str | None = None
    unknown_variable: str | None = None


def referenced_variables(formula: str | None) -> list[str]:
    """
    Get variable names referenced in a formula.

    Args:
        formula: Formula string

    Returns:
        Variable names in first-occurrence order, without duplicates
    """
    names = (t.text for t in tokenize(formula) if t.kind is TokenKind.VARIABLE)
    return list(dict.fromkeys(names))


def validate_formula_variables(
    formula: str | None,
    available_keys: Collection[str],
) -> ValidationResult:
    """
    Check that every variable in a formula is an available key.

    Never raises; a formula without variables is always valid.

    Args:
        formula: Candidate formula string
        available_keys: Field keys the formula may reference

    Returns:
        ValidationResult naming the first unknown variable on failure
    """
    for token in tokenize(formula):
        if token.kind is TokenKind.VARIABLE and token.text not in available_keys:
            return ValidationResult(
                valid=False,
                error=f"Unknown field: {token.text}",
                unknown_variable=token.text,
            )

    return ValidationResult(valid=True)
