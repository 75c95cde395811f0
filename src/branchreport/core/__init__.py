"""Core configuration and utilities for branchreport."""

from branchreport.core.config import settings
from branchreport.core.logging import setup_logging

__all__ = ["settings", "setup_logging"]
