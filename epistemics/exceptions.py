"""
Custom Exception Classes for the Epistemics Engine
===================================================

This module provides a hierarchy of custom exceptions that preserve context
through the error chain. All exceptions support:

1. Error chaining with `raise ... from e`
2. Error classification for monitoring/alerting
3. Original context preservation

Oracle failures are never surfaced through these classes to callers of the
belief-revision core: they are recovered locally by substituting a neutral
judgment. The classes below cover construction/validation failures and
misconfiguration, which the caller must handle.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    """Categories for error classification and monitoring."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    EXTERNAL_SERVICE = "external_service"
    CONFLICT = "conflict"
    INTERNAL = "internal"


# =============================================================================
# Base Exception
# =============================================================================

class EpistemicsError(Exception):
    """
    Base exception class for all engine errors.

    Provides:
    - Error category for monitoring
    - Context dictionary for debugging
    - Proper error chaining support

    Usage:
        try:
            # some operation
        except SomeError as e:
            raise EpistemicsError(
                message="Failed to build frame",
                category=ErrorCategory.VALIDATION,
                context={"frame": "efficiency"},
            ) from e
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.category = category
        self.context = context or {}
        self.original_error = original_error

        # Build full message with context
        full_message = message
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            full_message = f"{message} [{context_str}]"

        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        result = {
            "error": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = self.context
        if self.original_error:
            result["original_error"] = str(self.original_error)
        return result


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(EpistemicsError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field

        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            context=ctx,
            original_error=original_error,
        )


class UnknownFrameError(ValidationError):
    """Raised when a frame variant name is not recognised by the factory."""

    def __init__(
        self,
        name: str,
        available: Optional[List[str]] = None,
        original_error: Optional[Exception] = None,
    ):
        context: Dict[str, Any] = {"name": name}
        if available:
            context["available"] = available

        super().__init__(
            message=f"Unknown frame type: '{name}'",
            field="frame",
            context=context,
            original_error=original_error,
        )


class InvalidFrameParameterError(ValidationError):
    """Raised when frame parameter overrides name unknown parameters or bad values."""

    def __init__(
        self,
        names: List[str],
        message: str = "Invalid frame parameters",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            field="parameters",
            context={"names": names},
            original_error=original_error,
        )


# =============================================================================
# Conflict Errors
# =============================================================================

class ConflictError(EpistemicsError):
    """Raised when a conflict lifecycle operation cannot be performed."""

    def __init__(
        self,
        message: str = "Conflict operation failed",
        conflict_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        ctx = context or {}
        if conflict_id:
            ctx["conflict_id"] = conflict_id

        super().__init__(
            message=message,
            category=ErrorCategory.CONFLICT,
            context=ctx,
            original_error=original_error,
        )


class InvalidConflictTransitionError(ConflictError):
    """Raised when a conflict is moved backwards or out of a terminal state."""

    def __init__(
        self,
        conflict_id: str,
        current: str,
        requested: str,
    ):
        super().__init__(
            message=f"Cannot move conflict from '{current}' to '{requested}'",
            conflict_id=conflict_id,
            context={"current": current, "requested": requested},
        )


class UnknownAgentFrameError(ConflictError):
    """Raised when a resolution strategy has no frame for one of the agents."""

    def __init__(
        self,
        agent_id: str,
        conflict_id: Optional[str] = None,
    ):
        super().__init__(
            message=f"No frame registered for agent '{agent_id}'",
            conflict_id=conflict_id,
            context={"agent_id": agent_id},
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(EpistemicsError):
    """Raised when there's a configuration problem."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        ctx = context or {}
        if config_key:
            ctx["config_key"] = config_key

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            context=ctx,
            original_error=original_error,
        )


class MissingCredentialsError(ConfigurationError):
    """Raised when required credentials are missing."""

    def __init__(
        self,
        variable: str,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=f"{variable} environment variable not set",
            config_key=variable,
            original_error=original_error,
        )


class UnknownModelError(ConfigurationError):
    """Raised when an oracle model key is not in the model registry."""

    def __init__(
        self,
        model_key: str,
        available: Optional[List[str]] = None,
    ):
        context: Dict[str, Any] = {}
        if available:
            context["available"] = available

        super().__init__(
            message=f"Unknown model key: '{model_key}'",
            config_key="oracle_model",
            context=context,
        )


# =============================================================================
# External Service Errors
# =============================================================================

class ExternalServiceError(EpistemicsError):
    """Raised when an external service call fails."""

    def __init__(
        self,
        service: str,
        message: str = "External service call failed",
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        ctx = context or {}
        ctx["service"] = service

        super().__init__(
            message=f"{service}: {message}",
            category=ErrorCategory.EXTERNAL_SERVICE,
            context=ctx,
            original_error=original_error,
        )


class OracleError(ExternalServiceError):
    """Raised inside an oracle when a judgment reply cannot be used."""

    def __init__(
        self,
        operation: str,
        message: str = "Judgment failed",
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        ctx = context or {}
        ctx["operation"] = operation

        super().__init__(
            service="Oracle",
            message=message,
            context=ctx,
            original_error=original_error,
        )
