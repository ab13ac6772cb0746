"""
Logging infrastructure for the DRep Score engine.

Provides:
- Aligned, millisecond-stamped log format
- key=value structured messages
- Error and warning tracking for batch summaries
- A context manager for batch runs
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from drep_scoring.config import get_log_level

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S,%f"


class MillisecondsFormatter(logging.Formatter):
    """Formatter that includes milliseconds and aligns log levels."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - must match parent class method name
        ct = datetime.fromtimestamp(record.created)
        if datefmt and "%f" in datefmt:
            s = ct.strftime(datefmt.replace(",%f", ""))
            return s + f",{int(record.msecs):03d}"
        elif datefmt:
            return ct.strftime(datefmt)
        else:
            return ct.strftime("%Y-%m-%d %H:%M:%S") + f",{int(record.msecs):03d}"


def _with_fields(message: str, fields: dict) -> str:
    if not fields:
        return message
    formatted = " ".join(f"{k}={v}" for k, v in fields.items())
    return f"{message} [{formatted}]"


class ScoringLogger:
    """
    Logger for scoring runs with structured output and error tracking.
    """

    def __init__(
        self,
        name: str = "drep_scoring",
        log_level: Optional[str] = None,
    ):
        """
        Initialize the scoring logger.

        Args:
            name: Logger name
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR); defaults to DREP_SCORING_LOG_LEVEL
        """
        level_name = (log_level or get_log_level()).upper()
        level = getattr(logging, level_name, logging.INFO)

        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        if self.logger.handlers:
            self.logger.handlers.clear()

        formatter = MillisecondsFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        self.errors = []
        self.warnings = []

    def debug(self, message: str, **kwargs):
        self.logger.debug(_with_fields(message, kwargs), stacklevel=2)

    def info(self, message: str, **kwargs):
        self.logger.info(_with_fields(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        """Log warning message and track for reporting."""
        message = _with_fields(message, kwargs)
        self.logger.warning(message, stacklevel=2)
        self.warnings.append(
            {
                "message": message,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message and track for reporting."""
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        message = _with_fields(message, kwargs)

        self.logger.error(message, exc_info=exception, stacklevel=2)
        self.errors.append(
            {
                "message": message,
                "exception": str(exception) if exception else None,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def log_drep_scored(self, drep_id: str, score: int, weights_profile: str):
        """Log a completed DRep evaluation (debug level to keep batch output quiet)."""
        self.logger.debug(
            f"Scored DRep [drep_id={drep_id} score={score} weights_profile={weights_profile}]",
            stacklevel=2,
        )

    def log_batch_start(self, num_dreps: int):
        self.info("=" * 60)
        self.info(f"Batch scoring started - {num_dreps} DReps", num_dreps=num_dreps)
        self.info("=" * 60)

    def log_batch_complete(self, succeeded: int, failed: int, duration_seconds: float):
        self.info("=" * 60)
        self.info(
            "Batch scoring completed",
            succeeded=succeeded,
            failed=failed,
            total=succeeded + failed,
            duration_seconds=round(duration_seconds, 2),
        )
        self.info("=" * 60)

    def get_error_summary(self) -> dict:
        """Get summary of errors and warnings for reporting."""
        return {
            "total_errors": len(self.errors),
            "total_warnings": len(self.warnings),
            "errors": self.errors,
            "warnings": self.warnings,
        }


# ============================================================================
# Global Logger Instance
# ============================================================================

_default_logger: Optional[ScoringLogger] = None


def get_logger(
    name: str = "drep_scoring",
    log_level: Optional[str] = None,
) -> ScoringLogger:
    """
    Get or create the default scoring logger.

    Args:
        name: Logger name
        log_level: Logging level; defaults to DREP_SCORING_LOG_LEVEL

    Returns:
        ScoringLogger instance
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = ScoringLogger(name=name, log_level=log_level)

    return _default_logger


# ============================================================================
# Context Manager for Batch Runs
# ============================================================================


class BatchRunContext:
    """
    Context manager for batch scoring runs with automatic logging.

    Usage:
        with BatchRunContext(logger, num_dreps=10) as ctx:
            # ... score DReps ...
            ctx.increment_success()  # or ctx.increment_failure()
    """

    def __init__(self, logger: ScoringLogger, num_dreps: int):
        self.logger = logger
        self.num_dreps = num_dreps
        self.start_time = None
        self.succeeded = 0
        self.failed = 0

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.log_batch_start(self.num_dreps)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (datetime.now() - self.start_time).total_seconds()
        self.logger.log_batch_complete(
            succeeded=self.succeeded,
            failed=self.failed,
            duration_seconds=duration,
        )
        return False

    def increment_success(self):
        self.succeeded += 1

    def increment_failure(self):
        self.failed += 1


# ============================================================================
# Global Logging Configuration
# ============================================================================


def configure_global_logging(log_level: Optional[str] = None):
    """
    Configure the root logger with the unified format.

    Call this early in application startup so scorer module loggers
    (logging.getLogger(__name__)) share one format.

    Args:
        log_level: Logging level to apply globally; defaults to DREP_SCORING_LOG_LEVEL
    """
    level = getattr(logging, (log_level or get_log_level()).upper(), logging.INFO)
    formatter = MillisecondsFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    root_handler = logging.StreamHandler(sys.stdout)
    root_handler.setLevel(level)
    root_handler.setFormatter(formatter)
    root_logger.addHandler(root_handler)
