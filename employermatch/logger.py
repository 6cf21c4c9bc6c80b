"""
Structured logging system for employermatch.

Provides centralized logging with console and file outputs, plus
counters for monitoring how blocking and matching behave on a batch.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks blocking and matching metrics for a batch run.
    """

    def __init__(
        self,
        name: str = "employermatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = self._empty_metrics()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"employermatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    @staticmethod
    def _empty_metrics() -> dict:
        return {
            "names_indexed": 0,
            "blank_names_skipped": 0,
            "candidate_queries": 0,
            "candidates_returned": 0,
            "comparisons": 0,
            "matches": 0,
            "errors_by_type": {},
            "algorithm_match_rate": {},
        }

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_index_build(self, indexed: int, skipped: int):
        """Record names added to (or skipped by) a blocking index."""
        self.metrics["names_indexed"] += indexed
        self.metrics["blank_names_skipped"] += skipped

    def record_candidate_query(self, returned: int):
        """Record one candidate lookup and the size of its result."""
        self.metrics["candidate_queries"] += 1
        self.metrics["candidates_returned"] += returned

    def record_comparison(self, algorithm: str, is_match: bool):
        """Record one pairwise decision made by an algorithm."""
        self.metrics["comparisons"] += 1
        stats = self.metrics["algorithm_match_rate"].setdefault(
            algorithm, {"comparisons": 0, "matches": 0}
        )
        stats["comparisons"] += 1
        if is_match:
            self.metrics["matches"] += 1
            stats["matches"] += 1

    def record_error(self, error_type: str):
        """Record a failure by exception type."""
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        for algorithm, stats in metrics_copy["algorithm_match_rate"].items():
            if stats["comparisons"] > 0:
                stats["match_rate"] = round(
                    stats["matches"] / stats["comparisons"], 3
                )

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        queries = metrics["candidate_queries"]
        avg_bucket = 0
        if queries > 0:
            avg_bucket = round(metrics["candidates_returned"] / queries, 2)

        self.info("=== Matching Session Metrics ===")
        self.info(f"Names indexed: {metrics['names_indexed']} (blank skipped: {metrics['blank_names_skipped']})")
        self.info(f"Candidate queries: {queries} (avg {avg_bucket} candidates)")
        self.info(f"Comparisons: {metrics['comparisons']}, matches: {metrics['matches']}")

        if metrics["algorithm_match_rate"]:
            self.info("Algorithm Match Rates:")
            for algorithm, stats in metrics["algorithm_match_rate"].items():
                rate = stats.get("match_rate", 0) * 100
                self.info(f"  {algorithm}: {stats['matches']}/{stats['comparisons']} ({rate:.1f}%)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "employermatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
