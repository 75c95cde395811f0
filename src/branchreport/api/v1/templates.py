"""
Template field endpoints.

Field checks and entry computation. Callers send the template fields
with each request; nothing is stored here.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from branchreport.schemas.template import (
    EntryComputeRequest,
    EntryComputeResponse,
    FieldValidateRequest,
    TemplateField,
)
from branchreport.services.template_fields import TemplateFieldService

router = APIRouter()

# =============================================================================
# Dependencies
# =============================================================================


def get_template_field_service() -> TemplateFieldService:
    """Get template field service instance."""
    return TemplateFieldService()


# =============================================================================
# Template Field Endpoints
# =============================================================================


@router.post("/fields/validate", response_model=TemplateField)
async def validate_field(
    request: FieldValidateRequest,
    service: Annotated[TemplateFieldService, Depends(get_template_field_service)],
) -> TemplateField:
    """
    Check a new or edited field against the rest of its template.

    Returns the field ready to save, with its order assigned.
    """
    return service.validate_field(request.field, request.existing_fields)


@router.post("/compute", response_model=EntryComputeResponse)
async def compute_entry(
    request: EntryComputeRequest,
    service: Annotated[TemplateFieldService, Depends(get_template_field_service)],
) -> EntryComputeResponse:
    """Compute displayed values and list input fields still missing a value."""
    return EntryComputeResponse(
        values=service.compute_values(request.fields, request.values),
        missing=service.find_missing_values(request.fields, request.values),
    )
