#!/usr/bin/env python3
"""
decorators.py
--------------------
Shared decorators and context managers for database operations.

Provides:
    - DatabaseOperation: context manager timing and logging a unit of work
    - log_database_operation: decorator form of the same logging
    - handle_db_errors: decorator mapping SQLAlchemy errors to DatabaseError
    - log_failure: route a failure to the error log or, for domain
      outcomes such as NOT_FOUND, to the debug log
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Optional

# --- Third party imports ---
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# --- Local imports ---
from attic.core.exceptions import AtticError, DatabaseError
from attic.core.logging_manager import AtticLogger, safe_logger


def log_failure(logger, error: Exception, context: Dict[str, Any]) -> None:
    """
    Record a failed operation.

    AtticErrors other than DatabaseError are answers to the caller
    (NOT_FOUND, ITEM_EXISTS, ...) and are logged at debug level with their
    kind. Everything else goes to the error log.
    """
    if isinstance(error, AtticError) and not isinstance(error, DatabaseError):
        logger.log_debug(
            f"{context.get('operation', 'operation')} rejected",
            {"kind": error.kind, "status": error.status, **context},
        )
        return
    logger.log_error(error, context)


class DatabaseOperation:
    """
    Context manager wrapping one logical database operation.

    On success logs ``<name>_completed`` with the elapsed time. On failure
    records it through log_failure; SQLAlchemy errors are re-raised as
    DatabaseError, everything else propagates unchanged.

    Usage:
        with DatabaseOperation(self.logger, "merge_tags"):
            ...
    """

    def __init__(
        self,
        logger: Optional[AtticLogger],
        operation_name: str,
        log_start: bool = False,
    ) -> None:
        self.logger = safe_logger(logger)
        self.operation_name = operation_name
        self.log_start = log_start
        self.start_time: Optional[datetime] = None

    def _duration(self) -> float:
        if self.start_time is None:
            return 0.0
        return (datetime.now() - self.start_time).total_seconds()

    def __enter__(self) -> "DatabaseOperation":
        self.start_time = datetime.now()
        if self.log_start:
            self.logger.log_debug(f"Starting {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None:
            self.logger.log_operation(
                f"{self.operation_name}_completed",
                {"duration_seconds": self._duration(), "success": True},
            )
            return False

        log_failure(
            self.logger,
            exc_val,
            {"operation": self.operation_name, "duration_seconds": self._duration()},
        )

        if isinstance(exc_val, IntegrityError):
            raise DatabaseError(f"Data integrity violation: {exc_val}") from exc_val
        if isinstance(exc_val, SQLAlchemyError):
            raise DatabaseError(f"Database operation failed: {exc_val}") from exc_val
        return False


def log_database_operation(operation_name: str):
    """
    Decorator to log database operations with timing and context.

    Args:
        operation_name: Name of the operation being logged

    Returns:
        Decorator function
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            start_time = datetime.now()
            operation_id = f"{operation_name}_{start_time.strftime('%Y%m%d_%H%M%S_%f')}"
            logger = safe_logger(getattr(self, "logger", None))

            logger.log_debug(
                f"Starting {operation_name}",
                {
                    "operation_id": operation_id,
                    "args_count": len(args),
                    "kwargs_keys": list(kwargs.keys()),
                },
            )

            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                log_failure(
                    logger,
                    e,
                    {
                        "operation": operation_name,
                        "operation_id": operation_id,
                        "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    },
                )
                raise

            logger.log_operation(
                f"{operation_name}_completed",
                {
                    "operation_id": operation_id,
                    "duration_seconds": (datetime.now() - start_time).total_seconds(),
                    "success": True,
                },
            )
            return result

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Decorator to handle common database errors.

    Args:
        function: Function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"Data integrity violation: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database operation failed: {e}") from e

    return wrapper
