"""
Error handling module for the Kube operator core.

This module provides the error hierarchy that integrates with kopf and
categorizes configuration failures.
"""

from .operator_errors import (
    ConfigurationError,
    KubeConfigError,
    OperatorError,
)

__all__ = [
    "OperatorError",
    "ConfigurationError",
    "KubeConfigError",
]
