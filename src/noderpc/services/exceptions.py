"""Service layer exceptions.

Raised before anything is sent, when call arguments break a rule the
node would reject anyway. Node-side failures surface as
:class:`~noderpc.protocol.exceptions.RpcError` unchanged.
"""

from __future__ import annotations

from typing import Any

from noderpc.exceptions import NodeRpcError


class ServiceError(NodeRpcError):
    """Base exception for service layer errors.

    Attributes:
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ServiceError):
    """Raised when argument validation fails.

    Example:
        >>> raise ValidationError("Block height cannot be negative")
    """
