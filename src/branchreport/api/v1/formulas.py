"""
Formula endpoints.

Exposes formula validation for the template editor and evaluation for
the data-entry page.
"""

from fastapi import APIRouter

from branchreport.formula import (
    SoftFailed,
    evaluate_formula_result,
    validate_formula_variables,
)
from branchreport.schemas.formula import (
    FormulaEvaluateRequest,
    FormulaEvaluateResponse,
    FormulaValidateRequest,
    FormulaValidateResponse,
)

router = APIRouter()


@router.post("/validate", response_model=FormulaValidateResponse)
async def validate_formula(request: FormulaValidateRequest) -> FormulaValidateResponse:
    """
    Check that a formula only references available field keys.

    Both verdicts are returned with status 200.
    """
    result = validate_formula_variables(request.formula, set(request.available_keys))
    return FormulaValidateResponse(
        valid=result.valid,
        error=result.error,
        unknown_variable=result.unknown_variable,
    )


@router.post("/evaluate", response_model=FormulaEvaluateResponse)
async def evaluate(request: FormulaEvaluateRequest) -> FormulaEvaluateResponse:
    """
    Evaluate a formula against field values.

    Never fails on a bad formula; the value is 0 and ``soft_failed`` is set.
    """
    result = evaluate_formula_result(request.formula, request.values)
    if isinstance(result, SoftFailed):
        return FormulaEvaluateResponse(value=result.value, soft_failed=True, reason=result.reason)
    return FormulaEvaluateResponse(value=result.value)
