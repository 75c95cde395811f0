"""Template field schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

FIELD_KEY_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"


class TemplateField(BaseModel):
    """
    Schema for a report template field.

    A field without ``parent_id`` and without ``key`` is a section header.
    """

    id: str = Field(..., min_length=1, description="Field ID")
    key: Optional[str] = Field(
        None,
        max_length=64,
        pattern=FIELD_KEY_PATTERN,
        description="Key used to reference the field in formulas",
    )
    label: str = Field("", max_length=255, description="Display label")
    order: Optional[int] = Field(None, ge=0, description="Position in the template")
    formula: Optional[str] = Field(None, description="Formula computing this field")
    parent_id: Optional[str] = Field(None, description="Parent section field ID")

    @field_validator("key", "formula", "parent_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_formula(self) -> bool:
        return self.formula is not None

    @property
    def is_section(self) -> bool:
        return self.parent_id is None and self.key is None


class FieldValidateRequest(BaseModel):
    """Schema for checking a new or edited field against its template."""

    field: TemplateField
    existing_fields: list[TemplateField] = Field(
        default_factory=list, description="Fields already in the template"
    )


class EntryComputeRequest(BaseModel):
    """Schema for computing the displayed values of an entry."""

    fields: list[TemplateField]
    values: dict[str, Optional[float]] = Field(
        default_factory=dict, description="Field ID to entered value"
    )


class EntryComputeResponse(BaseModel):
    """Schema for computed entry values."""

    values: dict[str, float] = Field(..., description="Field ID to displayed value")
    missing: list[str] = Field(
        default_factory=list, description="IDs of input fields without a value"
    )
