"""
Tests for logger functionality.
"""

import json
from jobservice.events import JobRequest
from jobservice.handler import handle_request
from jobservice.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self):
        """Logger should be created with console output only by default."""
        logger = StructuredLogger(name="test", level="DEBUG")

        assert logger.logger.name == "test"
        assert len(logger.logger.handlers) == 1

    def test_context_appended_as_json(self, capsys):
        logger = StructuredLogger(name="test-context")

        logger.info("Handling jobs request", method="GET", job_id=None)

        out = capsys.readouterr().out
        assert "Handling jobs request | Context: " in out
        context = json.loads(out.strip().split(" | Context: ", 1)[1])
        assert context == {"method": "GET", "job_id": None}

    def test_level_filters_messages(self, capsys):
        logger = StructuredLogger(name="test-level", level="WARNING")

        logger.info("hidden")
        logger.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_error_with_traceback(self, capsys):
        logger = StructuredLogger(name="test-exc")

        try:
            raise RuntimeError("connection refused")
        except RuntimeError:
            logger.error("Request failed", exc_info=True, method="GET")

        out = capsys.readouterr().out
        assert "Traceback" in out
        assert "RuntimeError: connection refused" in out

    def test_file_output(self, tmp_path):
        logger = StructuredLogger(name="test-file", log_dir=tmp_path, enable_file=True, enable_console=False)

        logger.debug("written to file")
        for handler in logger.logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob("jobservice_*.log"))
        assert len(log_files) == 1
        assert "written to file" in log_files[0].read_text(encoding="utf-8")

    def test_file_keeps_debug_below_console_level(self, tmp_path, capsys):
        """The file captures DEBUG even when the console is at INFO."""
        logger = StructuredLogger(name="test-split", level="INFO", log_dir=tmp_path, enable_file=True)

        logger.debug("debug detail")
        for handler in logger.logger.handlers:
            handler.flush()

        assert "debug detail" not in capsys.readouterr().out
        log_file = next(tmp_path.glob("jobservice_*.log"))
        assert "debug detail" in log_file.read_text(encoding="utf-8")


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_returns_same_instance(self):
        assert get_logger() is get_logger()

    def test_reset_logger(self):
        first = get_logger()
        reset_logger()
        assert get_logger() is not first


class TestHandlerLogging:
    """The handler logs through the global logger."""

    def test_failure_logged_with_context(self, capsys, config, session_factory):
        request = JobRequest(method="PUT", job_id="1", body="{bad", groups=["Recruiters"])

        handle_request(request, config, session_factory)

        out = capsys.readouterr().out
        assert "ERROR" in out
        assert "Request failed" in out
        assert '"job_id": "1"' in out

    def test_denial_is_not_an_error(self, capsys, config, session_factory):
        handle_request(JobRequest(method="DELETE", job_id="1"), config, session_factory)

        out = capsys.readouterr().out
        assert "Recruiter role required" in out
        assert "ERROR" not in out
