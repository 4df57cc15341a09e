import sys
from pathlib import Path

import pytest

# Ensure the backend package is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lasttx.config import Settings  # noqa: E402  pylint: disable=wrong-import-position


@pytest.fixture()
def test_settings():
    return Settings(
        _env_file=None,
        ankr_api_key="",
        concurrency=4,
        target_chains="eth,bsc,polygon",
        query_mode="multi",
        request_timeout_seconds=5,
        max_retries=5,
        recheck_delay_seconds=5,
        retry_delay_seconds=10,
    )


@pytest.fixture()
def no_sleep():
    """Records requested delays instead of waiting."""
    delays = []

    async def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
