"""Template field service for business logic."""

from collections.abc import Mapping, Sequence
from typing import Optional

from branchreport.core.config import settings
from branchreport.core.exceptions import (
    DuplicateError,
    FormulaSyntaxError,
    FormulaValidationError,
    RequiredFieldError,
    ValidationError,
)
from branchreport.core.logging import get_logger
from branchreport.formula import (
    FormulaDependencyGraph,
    check_formula_syntax,
    evaluate_formula,
    referenced_variables,
    validate_formula_variables,
)
from branchreport.schemas.template import TemplateField

logger = get_logger(__name__)


class TemplateFieldService:
    """Service for report template field operations."""

    def validate_field(
        self,
        field: TemplateField,
        existing_fields: Sequence[TemplateField],
    ) -> TemplateField:
        """Check a new or edited field before it is saved.

        Args:
            field: Field being created or edited
            existing_fields: Fields of the same template; an entry with the
                same ID as ``field`` is its previous version and is ignored

        Returns:
            The field, with ``order`` filled in when it was not given

        Raises:
            RequiredFieldError: If the label, or the key of a child field, is missing
            ValidationError: If the parent field does not exist
            DuplicateError: If another field already uses the key
            FormulaSyntaxError: If the formula is malformed
            FormulaValidationError: If the formula is too long, references an
                unknown key or creates a circular reference

        """
        others = [f for f in existing_fields if f.id != field.id]

        if not field.label.strip():
            raise RequiredFieldError("Label")

        if field.parent_id is not None:
            if field.key is None:
                raise RequiredFieldError("Key")
            if field.parent_id not in {f.id for f in others}:
                raise ValidationError(
                    "Parent field not found",
                    errors=[{"field": "parent_id", "value": field.parent_id}],
                )

        if field.key is not None and any(f.key == field.key for f in others):
            raise DuplicateError("Template field", "key", field.key)

        if field.formula is not None:
            self._validate_formula(field, others)

        if field.order is None:
            field = field.model_copy(update={"order": self.next_order(others)})

        logger.info(
            "Template field validated",
            extra={"field_id": field.id, "key": field.key, "has_formula": field.is_formula},
        )
        return field

    def _validate_formula(
        self,
        field: TemplateField,
        others: Sequence[TemplateField],
    ) -> None:
        formula = field.formula

        if len(formula) > settings.formula_max_length:
            raise FormulaValidationError(
                formula,
                f"Formula is longer than {settings.formula_max_length} characters",
            )

        is_valid, error = check_formula_syntax(formula)
        if not is_valid:
            raise FormulaSyntaxError(formula, error)

        available_keys = {f.key for f in others if f.key is not None}
        result = validate_formula_variables(formula, available_keys)
        if not result.valid:
            raise FormulaValidationError(
                formula, result.error, unknown_variable=result.unknown_variable
            )

        if field.key is None:
            return

        graph = FormulaDependencyGraph.from_formulas(self._keyed_formulas(others))
        success, error = graph.add_formula_field(
            field.key, set(referenced_variables(formula))
        )
        if not success:
            raise FormulaValidationError(formula, error)

    @staticmethod
    def next_order(fields: Sequence[TemplateField]) -> int:
        """Get the order for a field appended to the template."""
        orders = [f.order for f in fields if f.order is not None]
        return max(orders, default=-1) + 1

    @staticmethod
    def _keyed_formulas(fields: Sequence[TemplateField]) -> list[tuple[str, str]]:
        return [(f.key, f.formula) for f in fields if f.key is not None and f.is_formula]

    def compute_values(
        self,
        fields: Sequence[TemplateField],
        values: Mapping[str, Optional[float]],
    ) -> dict[str, float]:
        """Compute the displayed value of every field of an entry.

        Input fields show their entered value (0 when blank). Formula fields
        are evaluated against the key -> value table, in dependency order so
        one formula field can build on another.

        Args:
            fields: Template fields
            values: Field ID to entered value

        Returns:
            Field ID to displayed value; section headers are left out

        """
        ordered = sorted(fields, key=lambda f: (f.order is None, f.order or 0))
        displayed: dict[str, float] = {}
        table: dict[str, float] = {}

        for f in ordered:
            if f.is_section and not f.is_formula:
                continue
            if not f.is_formula:
                value = values.get(f.id)
                displayed[f.id] = 0.0 if value is None else float(value)
                if f.key is not None:
                    table[f.key] = displayed[f.id]

        keyed = [f for f in ordered if f.key is not None and f.is_formula]
        graph = FormulaDependencyGraph.from_formulas(self._keyed_formulas(keyed))
        formula_keys = list(dict.fromkeys(f.key for f in keyed))
        key_order = graph.get_evaluation_order(set(formula_keys))
        if not key_order and formula_keys:
            logger.warning(
                "Circular formula references, evaluating in template order",
                extra={"keys": formula_keys},
            )
            key_order = formula_keys

        # A key shared by several fields is written by each in template order
        for key in key_order:
            for f in keyed:
                if f.key == key:
                    displayed[f.id] = evaluate_formula(f.formula, table)
                    table[key] = displayed[f.id]

        for f in ordered:
            if f.is_formula and f.key is None:
                displayed[f.id] = evaluate_formula(f.formula, table)

        return {f.id: displayed[f.id] for f in ordered if f.id in displayed}

    def find_missing_values(
        self,
        fields: Sequence[TemplateField],
        values: Mapping[str, Optional[float]],
    ) -> list[str]:
        """Get IDs of input fields that still need a value before submitting."""
        return [
            f.id
            for f in sorted(fields, key=lambda f: (f.order is None, f.order or 0))
            if f.key is not None and not f.is_formula and values.get(f.id) is None
        ]
