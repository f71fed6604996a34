from __future__ import annotations

import sys
from pathlib import Path

import pytest
import requests

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture
def http_error():
    """Return a factory for requests.HTTPError carrying a status code."""

    def _make(status: int) -> requests.HTTPError:
        response = requests.Response()
        response.status_code = status
        return requests.HTTPError(f"{status} Error", response=response)

    return _make
