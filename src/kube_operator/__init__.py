"""
Kube Operator - resource identity and API server connection profiles for
Kubernetes operators.

This package provides the configuration core a reconciliation engine builds on:
- Typed identity of parent and child resource kinds
- Per-child reconciliation policy and operator-wide settings
- Resolution of API server credentials from a service account or a kubeconfig
"""

__version__ = "0.1.0"
