"""Common test fixtures and utilities."""
import sys
import pytest
from loguru import logger

from streamvariant import StreamOutputVariant


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the default loguru sink after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def transcoded_variant():
    """Create a fully transcoded 720p variant."""
    return StreamOutputVariant.decode({
        "videoPassthrough": False,
        "audioPassthrough": False,
        "videoBitrate": 2500,
        "audioBitrate": 128,
        "scaledHeight": 720,
        "framerate": 30,
        "cpuUsageLevel": 2,
    })


@pytest.fixture
def variant_file(tmp_path):
    """Write a variant list to a JSON file."""
    path = tmp_path / "variants.json"
    path.write_text(
        '[{"videoBitrate": 1200, "audioBitrate": 96, "scaledWidth": 640},'
        ' {"videoPassthrough": true}]'
    )
    return path
