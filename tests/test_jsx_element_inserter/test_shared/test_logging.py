"""Tests for correlation-aware logging."""

import logging

from jsx_element_inserter.shared.logging import (
    CorrelationLogger,
    _ensure_correlation_fields,
    configure_logging,
    get_logger,
)


class TestCorrelationLogger:
    """Test CorrelationLogger functionality."""

    def test_records_carry_component_and_correlation_id(self, caplog) -> None:
        """Test extra fields are attached to every record."""
        caplog.set_level(logging.DEBUG, logger="jsx_tests.logging")
        logger = get_logger("jsx_tests.logging", "abc123", "element_builder")

        logger.info("Built element", extra={"tag_name": "div"})

        record = caplog.records[-1]
        assert record.getMessage() == "Built element"
        assert record.component == "element_builder"
        assert record.correlation_id == "abc123"
        assert record.tag_name == "div"

    def test_component_defaults_to_last_name_segment(self) -> None:
        """Test the component name falls back to the module name."""
        logger = CorrelationLogger("jsx_tests.some.module")

        assert logger.component == "module"
        assert logger.correlation_id is None

    def test_bind_keeps_component(self, caplog) -> None:
        """Test bind returns a logger with a new correlation ID."""
        caplog.set_level(logging.DEBUG, logger="jsx_tests.bind")
        logger = get_logger("jsx_tests.bind", None, "resolver")
        bound = logger.bind("req-7")

        bound.warning("Index clamped")

        assert bound.component == "resolver"
        assert caplog.records[-1].correlation_id == "req-7"
        assert logger.correlation_id is None

    def test_levels(self, caplog) -> None:
        """Test every level method emits at the matching level."""
        caplog.set_level(logging.DEBUG, logger="jsx_tests.levels")
        logger = get_logger("jsx_tests.levels", "c", "levels")

        logger.debug("d")
        logger.info("i")
        logger.warning("w")
        logger.error("e")
        logger.critical("c")

        assert [record.levelname for record in caplog.records] == [
            "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL",
        ]


class TestConfigureLogging:
    """Test root logging configuration."""

    def test_configure_logging_installs_single_handler(self) -> None:
        """Test configure_logging replaces root handlers and sets the level."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("WARNING")

            assert len(root.handlers) == 1
            assert root.level == logging.WARNING
            assert "correlation_id" in root.handlers[0].formatter._fmt
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)

    def test_filter_fills_missing_fields(self) -> None:
        """Test plain records get default component and correlation ID."""
        record = logging.LogRecord(
            "third.party.lib", logging.INFO, __file__, 1, "msg", None, None
        )

        assert _ensure_correlation_fields(record) is True
        assert record.component == "lib"
        assert record.correlation_id is None
