"""Tests for structured logging helpers."""

import logging

from xml_editor.shared.logging import CorrelationLogger, configure_logging, get_logger


class TestCorrelationLogger:
    """Test structured fields on records."""

    def test_extra_fields_attached(self, caplog):
        """Test that component and correlation ID reach the record."""
        logger = get_logger("xml_editor.test", "req-1", "tester")
        with caplog.at_level(logging.INFO, logger="xml_editor.test"):
            logger.info("hello", extra={"size": 3})

        record = caplog.records[-1]
        assert record.component == "tester"
        assert record.correlation_id == "req-1"
        assert record.size == 3

    def test_levels_reach_records(self, caplog):
        """Test that each exposed level logs at the matching stdlib level."""
        logger = get_logger("xml_editor.test_levels")
        with caplog.at_level(logging.DEBUG, logger="xml_editor.test_levels"):
            logger.debug("d")
            logger.info("i")
            logger.warning("w")
            logger.error("e", extra={"correlation_id": "override"})

        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR,
        ]
        assert caplog.records[-1].correlation_id == "override"

    def test_component_defaults_to_module(self):
        """Test the default component name."""
        assert CorrelationLogger("xml_editor.codec.bpe").component == "bpe"


class TestConfigureLogging:
    """Test handler installation."""

    def test_handler_replaced_not_duplicated(self):
        """Test that repeated configuration keeps one handler."""
        package_logger = logging.getLogger("xml_editor")
        try:
            configure_logging("DEBUG")
            configure_logging("ERROR")
            tagged = [
                h for h in package_logger.handlers
                if getattr(h, "_xml_editor_handler", False)
            ]
            assert len(tagged) == 1
            assert package_logger.level == logging.ERROR
        finally:
            for handler in list(package_logger.handlers):
                if getattr(handler, "_xml_editor_handler", False):
                    package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)
