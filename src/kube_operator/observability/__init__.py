"""
Observability utilities for the Kube operator.

This module provides structured logging for production troubleshooting.
"""

from .logging import StructuredFormatter, setup_structured_logging

__all__ = [
    "StructuredFormatter",
    "setup_structured_logging",
]
