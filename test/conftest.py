"""
Test Configuration

Environment setup MUST happen before any eventora import: settings and the loguru sinks
are built at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_dir = Path(__file__).parent

    test_log_dir = test_dir / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # No real backend, no real gateway delay, no shared state file
    os.environ['API_BASE_URL'] = 'http://eventora.test'
    os.environ['PAYMENT_SIMULATED_DELAY_SECONDS'] = '0'
    os.environ['LOCAL_STATE_DIR'] = str(test_dir / 'test_state')
    os.environ.setdefault('SERVICE_NAME', 'eventora-client-test')


_early_setup_test_environment()

from dotenv import load_dotenv  # noqa: E402
import pytest  # noqa: E402

# Fill anything not set above from the example env (never overrides)
load_dotenv(Path(__file__).parent.parent / '.env.example', override=False)

from eventora.platform.state.local_storage_client import LocalStorageClient  # noqa: E402


@pytest.fixture
def memory_storage() -> LocalStorageClient:
    return LocalStorageClient()
