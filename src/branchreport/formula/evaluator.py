"""Formula evaluator.

Evaluates postfix token sequences and exposes the fail-soft
``evaluate_formula`` entry point used when rendering formula fields.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from branchreport.core.config import settings
from branchreport.core.exceptions import FormulaSyntaxError
from branchreport.core.logging import get_logger
from branchreport.formula.postfix import resolve_variables, to_postfix
from branchreport.formula.tokens import Token, TokenKind, tokenize

logger = get_logger(__name__)


@dataclass(frozen=True)
class Ok:
    """Formula evaluated normally."""

    value: float


@dataclass(frozen=True)
class SoftFailed:
    """Formula evaluation failed and was suppressed."""

    reason: str
    value: float = 0.0


EvaluationResult = Ok | SoftFailed


def _apply(operator: str, a: float, b: float) -> float:
    if operator == "+":
        return a + b
    if operator == "-":
        return a - b
    if operator == "*":
        return a * b
    if operator == "/":
        # Division by zero shows as 0 instead of inf/NaN
        return a / b if b != 0 else 0.0
    raise ValueError(f"Unknown operator: {operator}")


def evaluate_postfix(postfix: Sequence[Token], formula: str = "") -> float:
    """
    Reduce a postfix token sequence to a single number.

    Args:
        postfix: Tokens from ``to_postfix``
        formula: Source formula, used in error messages

    Returns:
        Result value; 0.0 for an empty sequence

    Raises:
        FormulaSyntaxError: If an operator lacks operands or operands are left over
    """
    stack: list[float] = []

    for token in postfix:
        if token.kind is TokenKind.NUMBER:
            stack.append(float(token.text))
        elif token.kind is TokenKind.OPERATOR:
            if len(stack) < 2:
                raise FormulaSyntaxError(
                    formula, f"Missing operand for '{token.text}'"
                )
            b = stack.pop()
            a = stack.pop()
            stack.append(_apply(token.text, a, b))
        else:
            raise FormulaSyntaxError(formula, f"Unexpected token: {token.text}")

    if not stack:
        return 0.0
    if len(stack) > 1:
        raise FormulaSyntaxError(formula, "Missing operator between operands")

    return stack[0]


def evaluate_formula_result(
    formula: str | None,
    values: Mapping[str, Any] | None,
) -> EvaluationResult:
    """
    Evaluate a formula, reporting suppressed failures.

    Args:
        formula: Formula string such as ``"(A - B) / A"``
        values: Field key to numeric value; missing keys count as 0

    Returns:
        Ok with the value, or SoftFailed with the reason
    """
    source = formula or ""
    try:
        tokens = resolve_variables(tokenize(source), values)
        value = evaluate_postfix(to_postfix(tokens, source), source)
    except FormulaSyntaxError as e:
        return _soft_fail(source, e.error)
    except Exception as e:  # noqa: BLE001
        return _soft_fail(source, str(e) or e.__class__.__name__)

    if not math.isfinite(value):
        return _soft_fail(source, "Result is not a finite number")

    return Ok(value)


def _soft_fail(formula: str, reason: str) -> SoftFailed:
    if settings.log_soft_failures:
        logger.debug(
            "Formula evaluation suppressed",
            extra={"formula": formula, "reason": reason},
        )
    return SoftFailed(reason)


def evaluate_formula(
    formula: str | None,
    values: Mapping[str, Any] | None,
) -> float:
    """
    Evaluate a formula against a table of field values.

    Never raises: malformed formulas and any other evaluation failure
    give 0.0, so formula fields always display a number.

    Args:
        formula: Formula string
        values: Field key to numeric value; missing keys count as 0

    Returns:
        Computed value
    """
    return evaluate_formula_result(formula, values).value


def check_formula_syntax(formula: str | None) -> tuple[bool, str | None]:
    """
    Check that a formula is a well-formed arithmetic expression.

    Variables are not checked here; see ``validate_formula_variables``.

    Args:
        formula: Formula string

    Returns:
        Tuple of (is_valid, error_message)
    """
    source = formula or ""
    try:
        tokens = resolve_variables(tokenize(source), None)
        evaluate_postfix(to_postfix(tokens, source), source)
    except FormulaSyntaxError as e:
        return False, e.error
    return True, None
