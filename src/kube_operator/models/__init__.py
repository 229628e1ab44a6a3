"""
Models package - Pydantic models for operator and connection configuration.

Defines data models for:
- Resource kind identity (K8sType, K8sTypeRef)
- Operator intent (OperatorConfig, ChildConfig, UpdateStrategy)
- API server connection profiles (ClientConfig, Credentials, CAData)
"""
