"""
Standardized exception hierarchy for taskstreak
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class TaskStreakError(Exception):
    """
    Base exception for all taskstreak errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise TaskStreakError(
            message="Failed to save progress",
            operation="upsert_progress",
            context={"task_id": "abc-123"}
        )
    """

    def __init__(
        self,
        message: str,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,  # Avoid conflict with logging's 'message' field
            "request_id": self.request_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.warning(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.user_message,
            "type": self.__class__.__name__,
            "message": self.message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (User Input)
# ==========================================

class ValidationError(TaskStreakError):
    """
    Raised when input fails validation

    Examples:
    - Malformed date
    - Progress referencing an unknown task

    Example:
        raise ValidationError(
            message="Invalid date format. Use YYYY-MM-DD",
            field="date",
            value="2024-13-40"
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        extra_context = kwargs.pop("context", None) or {}
        super().__init__(
            message=message,
            user_message=message,
            context={"field": field, "value": value, **extra_context},
            **kwargs
        )


# ==========================================
# Lookup Errors
# ==========================================

class RecordNotFoundError(TaskStreakError):
    """Requested record does not exist"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        extra_context = kwargs.pop("context", None) or {}
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found",
            context={"record_type": record_type, "record_id": record_id, **extra_context},
            **kwargs
        )


# ==========================================
# Database Errors
# ==========================================

class DatabaseError(TaskStreakError):
    """
    Base class for database-related errors
    """
    pass


class DatabaseConnectionError(DatabaseError):
    """Database connection failed"""

    def __init__(self, message: str = "Database connection failed", **kwargs):
        super().__init__(
            message=message,
            user_message="We're having trouble connecting to the database. Please try again in a moment.",
            **kwargs
        )


class QueryError(DatabaseError):
    """Database query execution failed"""

    def __init__(
        self,
        message: str,
        query: Optional[str] = None,
        **kwargs
    ):
        self.query = query
        extra_context = kwargs.pop("context", None) or {}
        super().__init__(
            message=message,
            user_message="We encountered an issue saving your data. Please try again.",
            context={"query": query, **extra_context},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(TaskStreakError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        extra_context = kwargs.pop("context", None) or {}
        super().__init__(
            message=message,
            user_message="The system is not properly configured.",
            context={"config_key": config_key, **extra_context},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_external_exception(
    error: Exception,
    operation: str,
    context: Optional[Dict[str, Any]] = None
) -> TaskStreakError:
    """
    Wrap external exceptions (psycopg, etc.) into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        context: Additional context

    Returns:
        Appropriate TaskStreakError subclass

    Example:
        try:
            await cur.execute(query)
        except psycopg.Error as e:
            raise wrap_external_exception(e, operation="upsert_progress")
    """
    import psycopg

    if isinstance(error, psycopg.OperationalError):
        return DatabaseConnectionError(
            message=f"Database connection failed: {str(error)}",
            operation=operation,
            context=context,
            cause=error
        )
    elif isinstance(error, psycopg.Error):
        return QueryError(
            message=f"Database query failed: {str(error)}",
            operation=operation,
            context=context,
            cause=error
        )

    # Generic fallback
    return TaskStreakError(
        message=f"{operation} failed: {str(error)}",
        operation=operation,
        context=context,
        cause=error
    )
