"""
Constants used throughout the Kube operator core.

This module defines all constant values used by the operator including:
- Default label names for tracking and ownership of child resources
- Well-known in-cluster service account paths
- Default server and client settings
"""

# Label constants for resource identification and management
DEFAULT_TRACKING_LABEL_NAME = "app.kubernetes.io/instance"
DEFAULT_OWNERSHIP_LABEL_NAME = "app.kubernetes.io/managed-by"

# In-cluster service account volume, mounted by the kubelet
SERVICE_ACCOUNT_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"
SERVICE_ACCOUNT_CA_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/ca.crt"
API_SERVER_HOSTNAME = "kubernetes.default.svc"

# Set by the kubelet in every pod's environment
IN_CLUSTER_ENV_VAR = "KUBERNETES_SERVICE_HOST"

# Kubeconfig discovery
KUBECONFIG_ENV_VAR = "KUBECONFIG"
DEFAULT_KUBECONFIG_PATH = "~/.kube/config"

# Default configuration values
DEFAULT_SERVER_PORT = 8080
DEFAULT_USER_AGENT = "kube-operator/0.1.0"

# HTTP header names used by API clients
AUTHORIZATION_HEADER = "Authorization"
IMPERSONATE_USER_HEADER = "Impersonate-User"
IMPERSONATE_GROUP_HEADER = "Impersonate-Group"

# Error message templates
ERROR_KUBECONFIG_NOT_FOUND = "Kubeconfig file '{}' does not exist"
ERROR_CONTEXT_NOT_FOUND = "Context '{}' not found in kubeconfig"
ERROR_CLUSTER_NOT_FOUND = "Cluster '{}' not found in kubeconfig"
ERROR_USER_NOT_FOUND = "User '{}' not found in kubeconfig"
