"""Service layer modules."""

from branchreport.services.template_fields import TemplateFieldService

__all__ = ["TemplateFieldService"]
