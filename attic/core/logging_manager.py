#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for the Attic store, its procedures and the command line.

Each AtticLogger owns two stdlib loggers:

    attic.<component>          every record, to ``<component>.log``;
                               WARNING and above also go to the console
    attic.<component>.errors   errors with context and traceback,
                               to ``errors.log``

Detail payloads are appended as JSON so log lines stay greppable:

    2024-05-01 10:00:00 - INFO - OPERATION - tags_merged: {"source": "Stoic", ...}

Components that may run without logging take ``Optional[AtticLogger]`` and
go through ``safe_logger``, which substitutes a no-op NullLogger.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

# --- Local imports ---
from .exceptions import AtticError

FILE_FORMAT = "%(asctime)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return f"{message}: {json.dumps(details, default=str, ensure_ascii=False)}"


class AtticLogger:
    """
    Rotating file logger for one component (``database``, ``api``, ...).

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component name, also the log file stem
        main_logger: Logger for operations, debug, info and warnings
        error_logger: Logger for errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "attic",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        """
        Initialize logging system.

        Args:
            log_dir: Directory for log files (created if missing)
            component_name: Component name, e.g. 'database'
            max_bytes: Size at which a log file rotates (default: 10MB)
            backup_count: Rotated files to keep (default: 5)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.main_logger = self._logger(
            f"attic.{component_name}", logging.DEBUG, f"{component_name}.log"
        )
        self.error_logger = self._logger(
            f"attic.{component_name}.errors", logging.ERROR, "errors.log"
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.main_logger.addHandler(console)

    def _logger(self, name: str, level: int, filename: str) -> logging.Logger:
        """Fresh named logger writing to one rotating file."""
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        # A second AtticDB on the same component must not double every line
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def close(self) -> None:
        """Detach and close every handler owned by this logger."""
        for logger in (self.main_logger, self.error_logger):
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    # ----- Records -----

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a completed operation with its details."""
        self.main_logger.info(_with_details(f"OPERATION - {operation}", details or {}))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details(f"DEBUG - {message}", details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details(f"INFO - {message}", details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.warning(_with_details(f"WARNING - {message}", details))

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Record an error in ``errors.log``.

        AtticErrors are prefixed with their kind. The traceback is written
        only when called while the exception is being handled.

        Args:
            error: Exception that occurred
            context: Where it happened (operation name, ids, ...)
        """
        message = str(error)
        if isinstance(error, AtticError):
            message = f"[{error.kind}] {message}"
        self.error_logger.error(f"ERROR - {type(error).__name__}: {message}")

        if context:
            self.error_logger.error(
                "Context: " + ", ".join(f"{key}={value}" for key, value in context.items())
            )
        if sys.exc_info()[0] is not None:
            self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log an error raised by a command and format it for the terminal.

        Args:
            error: Exception to log
            context: Command context (operation, arguments)
            show_traceback: Append the traceback to the returned text

        Returns:
            One-line message, e.g. ``❌ ISBN_EXISTS (409): A book with this ISBN already exists``
        """
        self.log_error(error, context or {"source": "cli"})
        message = format_cli_error(error)
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


def format_cli_error(error: Exception) -> str:
    """Render an exception as a single CLI line."""
    if isinstance(error, AtticError):
        return f"❌ {error.kind} ({error.status}): {error.message}"
    return f"❌ {type(error).__name__}: {error}"


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Report a failed command and exit.

    Logs through ``ctx.obj["logger"]`` when the command already opened the
    database, prints one line to stderr (plus the traceback with
    ``--verbose``) and calls ``sys.exit(exit_code)``.

    Args:
        ctx: Click context; ``ctx.obj`` holds ``logger`` and ``verbose``
        error: Exception that occurred
        operation: Command name, e.g. 'call' or 'seed'
        additional_context: Extra context such as the procedure or fixture path
        exit_code: Process exit status
    """
    context = {"operation": operation, **(additional_context or {})}
    logger = safe_logger(ctx.obj.get("logger"))

    click.echo(
        logger.log_cli_error(error, context, show_traceback=ctx.obj.get("verbose", False)),
        err=True,
    )
    sys.exit(exit_code)


class NullLogger:
    """No-op stand-in exposing the AtticLogger interface."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """Format the error without logging it."""
        return format_cli_error(error)


_null_logger = NullLogger()


def safe_logger(logger: Optional[AtticLogger]) -> AtticLogger:
    """Return ``logger``, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
