"""Tests for the exception hierarchy and logging setup."""

import logging

import pytest

from testability_insight.exceptions import (
    AnalysisError,
    ComplexityError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    InvalidPathError,
    NoEligibleMetricsError,
    ParsingError,
    ReferenceDatasetError,
    TestabilityInsightError,
)
from testability_insight.logging_config import get_logger, setup_logging


class TestHierarchy:
    """Per-file failures are AnalysisErrors; run-level ones ConfigurationErrors."""

    @pytest.mark.parametrize(
        "error",
        [
            FileAccessError("a.js", "permission denied"),
            ParsingError("a.js", "js + legacy types", "unexpected token at 1:5"),
            ComplexityError("a.js", "ValueError: boom"),
            NoEligibleMetricsError("a.js"),
        ],
    )
    def test_analysis_errors(self, error):
        assert isinstance(error, AnalysisError)
        assert error.filepath == "a.js"
        assert "filepath=a.js" in str(error)

    @pytest.mark.parametrize(
        "error",
        [
            InvalidPathError("/nope", "path does not exist"),
            InvalidConfigError("rank_policy", "fuzzy", "expected one of exact, insertion"),
            ReferenceDatasetError("missing 'values'"),
        ],
    )
    def test_configuration_errors(self, error):
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, TestabilityInsightError)

    def test_message_without_details(self):
        assert str(TestabilityInsightError("plain")) == "plain"

    def test_parsing_error_details(self):
        error = ParsingError("a.ts", "ts + jsx", "unexpected token at 3:7")
        assert error.dialect == "ts + jsx"
        assert "reason=unexpected token at 3:7" in str(error)


class TestLogging:
    def test_levels(self):
        assert setup_logging("verbose").level == logging.DEBUG
        assert setup_logging("quiet").level == logging.ERROR
        assert setup_logging().level == logging.WARNING

    def test_logger_names_are_prefixed(self):
        assert get_logger("scoring").name == "testability_insight.scoring"
        assert get_logger("testability_insight.api").name == "testability_insight.api"
        assert get_logger().name == "testability_insight"

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(log_file=str(log_file))
        get_logger("test").warning("written to file")
        assert "written to file" in log_file.read_text()
