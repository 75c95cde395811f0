"""
Branch Report - branch data collection with computed report fields.

Admins define report templates whose fields may carry arithmetic formulas
over other field keys; branch users enter values and formula fields are
computed from them.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from branchreport.main import app

__all__ = ["app", "__version__"]
