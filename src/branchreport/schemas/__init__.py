"""Schemas for the branchreport API."""

from branchreport.schemas import formula, template

__all__ = ["formula", "template"]
