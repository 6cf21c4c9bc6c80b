"""
Tests for logger functionality.
"""

import pytest
from employermatch.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["names_indexed"] == 0

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # Should not raise exceptions
        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_log_with_context(self, tmp_path):
        """Context is appended to the message as JSON."""
        logger = StructuredLogger(
            name="test-context",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Index built", buckets=16, names=3)

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert 'Index built | Context: {"buckets": 16, "names": 3}' in log_content

    def test_metrics_tracking(self, tmp_path):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.record_index_build(indexed=3, skipped=1)
        logger.record_candidate_query(2)
        logger.record_candidate_query(0)
        logger.record_comparison("hybrid", True)
        logger.record_comparison("hybrid", False)
        logger.record_error("OperationalError")

        metrics = logger.get_metrics()

        assert metrics["names_indexed"] == 3
        assert metrics["blank_names_skipped"] == 1
        assert metrics["candidate_queries"] == 2
        assert metrics["candidates_returned"] == 2
        assert metrics["comparisons"] == 2
        assert metrics["matches"] == 1
        assert metrics["errors_by_type"]["OperationalError"] == 1
        assert metrics["algorithm_match_rate"]["hybrid"]["match_rate"] == 0.5

    def test_match_rate_calculation(self, tmp_path):
        """Match rate should be calculated correctly."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        # 3 comparisons, 2 matches = 66.7%
        logger.record_comparison("jaro-winkler", True)
        logger.record_comparison("jaro-winkler", True)
        logger.record_comparison("jaro-winkler", False)

        metrics = logger.get_metrics()
        match_rate = metrics["algorithm_match_rate"]["jaro-winkler"]["match_rate"]

        assert match_rate == pytest.approx(0.667, rel=0.01)

    def test_metrics_summary(self, tmp_path):
        """Summary is written to the log."""
        logger = StructuredLogger(
            name="test-summary",
            log_dir=tmp_path,
            enable_console=False,
        )
        logger.record_comparison("hybrid", True)
        logger.log_metrics_summary()

        log_content = next(tmp_path.glob("*.log")).read_text()
        assert "Matching Session Metrics" in log_content
        assert "hybrid: 1/1 (100.0%)" in log_content

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        log_files = list(tmp_path.glob("*.log"))
        assert len(log_files) == 1
        assert log_files[0].name.startswith("employermatch_")

        log_content = log_files[0].read_text()
        assert "Test message" in log_content


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()  # Start fresh

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_candidate_query(4)

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        # Should be different instance with fresh metrics
        assert logger2.metrics["candidate_queries"] == 0
