"""Formula schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field


class FormulaValidateRequest(BaseModel):
    """Schema for checking a formula's variables."""

    formula: str = Field(..., description="Candidate formula, e.g. 'A - B'")
    available_keys: list[str] = Field(
        default_factory=list, description="Field keys the formula may reference"
    )


class FormulaValidateResponse(BaseModel):
    """Schema for a formula variable verdict."""

    valid: bool
    error: Optional[str] = None
    unknown_variable: Optional[str] = None


class FormulaEvaluateRequest(BaseModel):
    """Schema for evaluating a formula."""

    formula: Optional[str] = Field(None, description="Formula to evaluate")
    values: dict[str, Optional[float]] = Field(
        default_factory=dict, description="Field key to entered value"
    )


class FormulaEvaluateResponse(BaseModel):
    """Schema for an evaluated formula."""

    value: float
    soft_failed: bool = Field(
        default=False, description="Whether an evaluation error was suppressed to 0"
    )
    reason: Optional[str] = None
