"""
Utils package - Credential resolution for the Kube operator.

Contains helper modules for:
- In-cluster service account resolution
- Kubeconfig resolution
- Kubernetes client construction from a resolved profile
"""

from kube_operator.utils.kubeconfig import (
    KubeConfigFileLoader,
    KubeConfigResolver,
    load_kubeconfig_config,
)
from kube_operator.utils.service_account import load_service_account_config

__all__ = [
    "KubeConfigFileLoader",
    "KubeConfigResolver",
    "load_kubeconfig_config",
    "load_service_account_config",
]
