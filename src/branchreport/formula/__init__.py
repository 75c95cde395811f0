"""Formula engine for branch reports.

Formulas are arithmetic expressions over template field keys, e.g.
``"(A - B) / A"``. Supported: numeric literals, field keys, ``+ - * /``
and parentheses. Evaluation never raises: unknown keys count as 0,
division by zero gives 0, and malformed formulas evaluate to 0.
"""

from branchreport.formula.dependencies import FormulaDependencyGraph
from branchreport.formula.evaluator import (
    EvaluationResult,
    Ok,
    SoftFailed,
    check_formula_syntax,
    evaluate_formula,
    evaluate_formula_result,
    evaluate_postfix,
)
from branchreport.formula.postfix import PRECEDENCE, resolve_variables, to_postfix
from branchreport.formula.tokens import Token, TokenKind, tokenize
from branchreport.formula.validator import (
    ValidationResult,
    referenced_variables,
    validate_formula_variables,
)

__all__ = [
    "EvaluationResult",
    "FormulaDependencyGraph",
    "Ok",
    "PRECEDENCE",
    "SoftFailed",
    "Token",
    "TokenKind",
    "ValidationResult",
    "check_formula_syntax",
    "evaluate_formula",
    "evaluate_formula_result",
    "evaluate_postfix",
    "referenced_variables",
    "resolve_variables",
    "to_postfix",
    "tokenize",
    "validate_formula_variables",
]
