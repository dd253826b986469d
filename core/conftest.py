import pytest
import structlog
from structlog.testing import LogCapture


@pytest.fixture(autouse=True)
def log_capture():
    # Keeps unit tests quiet and lets them assert on emitted events
    capture = LogCapture()
    structlog.configure(processors=[capture])
    yield capture
    structlog.reset_defaults()
