"""
API route modules.
"""

from . import health, system_info, classify, benchmark, cases

__all__ = ["health", "system_info", "classify", "benchmark", "cases"]
