"""Shared test fixtures."""

import logging

import numpy as np
import pytest

from qrdots.surface import DrawingSurface

from helpers import RecordingSurface


@pytest.fixture
def surface():
    return DrawingSurface(64, 64, supersample=1)


@pytest.fixture
def recording_surface():
    return RecordingSurface(64, 64, supersample=1)


@pytest.fixture
def identity():
    return np.identity(3)


@pytest.fixture(autouse=True)
def _reset_qrdots_logging():
    yield
    root = logging.getLogger("qrdots")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
