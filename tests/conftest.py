from __future__ import annotations

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_loguru():
    """The CLI replaces loguru sinks; drop them so no sink outlives capsys."""
    yield
    logger.remove()
