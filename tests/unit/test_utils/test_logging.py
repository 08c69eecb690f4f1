"""Tests for logging utilities."""

from loguru import logger

from streamvariant.utils.logging import setup_logging


def test_setup_logging_file(tmp_path):
    """Test messages at or above the level reach the log file."""
    log_file = tmp_path / "streamvariant.log"
    setup_logging("INFO", log_file)

    logger.debug("hidden message")
    logger.warning("visible message")
    logger.remove()  # Flush and close sinks

    content = log_file.read_text()
    assert "visible message" in content
    assert "hidden message" not in content


def test_setup_logging_replaces_handlers(mocker):
    """Test existing handlers are removed before adding new ones."""
    mock_logger = mocker.patch("streamvariant.utils.logging.logger")

    setup_logging("DEBUG")

    mock_logger.remove.assert_called_once_with()
    assert mock_logger.add.call_count == 1
    assert mock_logger.add.call_args.kwargs["level"] == "DEBUG"


def test_setup_logging_with_file_adds_two_sinks(mocker, tmp_path):
    """Test a file sink is added alongside the console."""
    mock_logger = mocker.patch("streamvariant.utils.logging.logger")

    setup_logging("WARNING", tmp_path / "out.log")

    assert mock_logger.add.call_count == 2
    file_call = mock_logger.add.call_args_list[1]
    assert file_call.kwargs["sink"] == str(tmp_path / "out.log")
    assert file_call.kwargs["rotation"] == "100 MB"
