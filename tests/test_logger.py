"""
Test suite for configuration wrappers and the logging system
"""

import logging

from sunswap import constants
from sunswap.constants import ConfigBool, ConfigString, parse_bool
from sunswap.logger import LogManager, SunswapLogHighlighter, TerminalSafeFormatter, get_logger


class TestConfig:

    def test_parse_bool(self):
        assert parse_bool(" true ") is True
        assert parse_bool("FALSE") is False
        assert parse_bool("INFO") == "INFO"
        assert parse_bool("") == ""

    def test_wrappers_keep_defaults(self):
        value = ConfigString("DEBUG", "INFO")
        assert value == "DEBUG"
        assert value.default() == "INFO"
        flag = ConfigBool(True, False)
        assert flag == True  # noqa: E712
        assert str(flag) == "True"
        assert flag.default() is False

    def test_protocol_defaults(self):
        assert constants.CHAIN_ID == 1
        assert constants.PROTOCOL_FEE_DIVISOR == 5
        assert constants.LOG_FILE_OUTPUT == False  # noqa: E712


class TestLogger:

    def test_singleton(self):
        assert LogManager() is LogManager()
        assert LogManager().is_configured

    def test_get_logger(self):
        logger = get_logger("sunswap.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "sunswap.test"

    def test_sanitize_strips_control_sequences(self):
        assert TerminalSafeFormatter.sanitize("a\x1b[31mred\x1b[0m\r\x07b") == "aredb"

    def test_invalid_format_falls_back(self):
        assert LogManager.validate_log_format("%(nope)s") == str(constants.LOG_FORMAT.default())

    def test_highlighter_styles_reason(self):
        text = SunswapLogHighlighter()("swap rejected: SunswapV2: K")
        assert any(span.style == "sunswap.reason" for span in text.spans)

    def test_only_package_logger_configured(self):
        root = logging.getLogger()
        marker = logging.NullHandler()
        root.addHandler(marker)
        try:
            LogManager().configure()
            package_logger = logging.getLogger("sunswap")
            assert package_logger.handlers
            assert package_logger.propagate is False
            assert marker in root.handlers
            assert not set(package_logger.handlers) & set(root.handlers)
        finally:
            root.removeHandler(marker)
