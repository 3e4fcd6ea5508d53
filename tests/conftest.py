import pytest
import sys
import os
import logging
from unittest.mock import MagicMock

import requests

# Ensure the project root is in the Python path for imports in tests
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import config_loader


@pytest.fixture(autouse=True)
def configure_logging(caplog):
    """Ensure logging is configured to capture DEBUG level messages for all tests."""
    caplog.set_level(logging.DEBUG, logger="root")


@pytest.fixture
def config():
    """Default configuration, as used when no config file is given."""
    return config_loader.default_config()


def make_response(body=b"", status_code=200, reason="OK"):
    """Creates a MagicMock standing in for a streamed requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.content = body
    response.iter_content.side_effect = lambda chunk_size=1: iter(
        [body[i:i + chunk_size] for i in range(0, len(body), chunk_size)]
    )
    response.close = MagicMock()
    return response


@pytest.fixture
def fake_web():
    """
    Returns a function building a requests.get replacement from {url: response}.

    URLs missing from the mapping raise ConnectionError, like an unreachable host.
    """
    def build(responses):
        def fake_get(url, **kwargs):
            if url not in responses:
                raise requests.exceptions.ConnectionError(f"Failed to establish a new connection: {url}")
            return responses[url]
        return fake_get
    return build
