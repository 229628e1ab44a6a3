"""
Operator error hierarchy with categorization and retry logic.

This module defines the error types raised while resolving operator and
connection configuration, with integration into kopf's retry mechanisms.
"""

import kopf


class OperatorError(Exception):
    """
    Base error class for all operator-related exceptions.

    Provides categorization, retry behavior, and user guidance for resolution.
    """

    def __init__(
        self,
        message: str,
        category: str,
        retryable: bool = True,
        delay: int = 30,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize operator error.

        Args:
            message: Human-readable error description
            category: Error category (configuration, kubeconfig, ...)
            retryable: Whether kopf should retry this operation
            delay: Suggested retry delay in seconds
            user_action: What user should do to resolve the issue
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.category = category
        self.retryable = retryable
        self.delay = delay
        self.user_action = user_action
        self.cause = cause

    def as_kopf_error(self):
        """Convert to appropriate kopf exception type."""
        if self.retryable:
            return kopf.TemporaryError(str(self), delay=self.delay)
        else:
            return kopf.PermanentError(str(self))

    def __str__(self) -> str:
        """Enhanced string representation with user guidance."""
        base_msg = super().__str__()
        if self.user_action:
            return f"{base_msg}\nAction required: {self.user_action}"
        return base_msg


class ConfigurationError(OperatorError):
    """Error in operator or connection configuration."""

    def __init__(
        self,
        message: str,
        retryable: bool = False,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            message=message,
            category="configuration",
            retryable=retryable,
            user_action=user_action or "Review and correct configuration",
            cause=cause,
        )


class KubeConfigError(ConfigurationError):
    """
    Kubeconfig could not be resolved into a connection profile.

    Raised for a missing or malformed file, an unknown context, cluster or
    user, or credentials that cannot be resolved.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        context: str | None = None,
        user_action: str | None = None,
        cause: Exception | None = None,
    ):
        if context:
            message = f"{message} (context: {context})"
        if path:
            message = f"{message} [{path}]"
        super().__init__(
            message=message,
            user_action=user_action
            or "Check the kubeconfig file, KUBECONFIG and the selected context",
            cause=cause,
        )
        self.category = "kubeconfig"
        self.path = path
        self.context = context
