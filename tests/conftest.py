import sys

import pytest
from loguru import logger

from sentembed.app.provider import set_default_embedder

ENV_VARS = (
    "SENTEMBED_SETTINGS",
    "SENTEMBED_PROVIDER",
    "SENTEMBED_MODEL",
    "SENTEMBED_DEVICE",
    "SENTEMBED_CACHE_DIR",
    "SENTEMBED_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    set_default_embedder(None)
    yield
    set_default_embedder(None)
    # the CLI rebinds loguru to the captured stderr of the test that ran it
    logger.remove()
    logger.add(sys.stderr)
